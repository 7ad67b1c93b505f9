import os
from dotenv import load_dotenv

from mailchimp_ses.topics import parse_topic_list

DEFAULT_INPUT_FILE = "mailchimp_export.csv"
DEFAULT_OUTPUT_FILE = "ses_contacts.csv"


def load_settings():
    """
    Reads the command line defaults from the environment (and .env if present).

    MAILCHIMP_EXPORT_FILE, SES_IMPORT_FILE and SES_TOPIC_PREFERENCES
    ("Weekly Digest=OPT_IN,Promotions=OPT_OUT").
    """
    load_dotenv()
    return {
        "input_file": os.getenv("MAILCHIMP_EXPORT_FILE") or DEFAULT_INPUT_FILE,
        "output_file": os.getenv("SES_IMPORT_FILE") or DEFAULT_OUTPUT_FILE,
        "topic_preferences": parse_topic_list(os.getenv("SES_TOPIC_PREFERENCES")),
    }
