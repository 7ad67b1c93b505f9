from enum import Enum

from mailchimp_ses.errors import InvalidTopicPreferences

# --- SES contact list columns ---

BASE_FIELDS = ["emailAddress", "unsubscribeAll", "attributesData"]
TOPIC_PREFIX = "topicPreferences."


class TopicPreference(str, Enum):
    OPT_IN = "OPT_IN"
    OPT_OUT = "OPT_OUT"

    @classmethod
    def parse(cls, value):
        """
        Accepts a TopicPreference or one of its spellings:
        OPT_IN / opt_in / opt-in / in, and the same for out.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper().replace("-", "_")
        if normalized in ("IN", "OUT"):
            normalized = f"OPT_{normalized}"
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidTopicPreferences(
                f"Unknown topic preference '{value}' (expected OPT_IN or OPT_OUT)"
            ) from None


def parse_topic_spec(spec):
    """Splits 'Weekly Digest=OPT_IN' into ('Weekly Digest', TopicPreference.OPT_IN)."""
    name, sep, preference = spec.rpartition("=")
    if not sep:
        raise InvalidTopicPreferences(
            f"Topic '{spec}' must look like NAME=OPT_IN or NAME=OPT_OUT"
        )
    return name.strip(), TopicPreference.parse(preference)


def parse_topic_list(value):
    """Parses a comma separated list of NAME=PREFERENCE pairs, keeping their order."""
    if not value:
        return []
    return [parse_topic_spec(item) for item in value.split(",") if item.strip()]


class SesContactSchema:
    """
    Fixed column layout of the SES import file for one run.

    Built once from the topic configuration, so every row written with it has
    exactly the same columns in the same order.
    """

    def __init__(self, topic_values=None):
        self.topic_values = dict(topic_values or {})
        self.fieldnames = BASE_FIELDS + list(self.topic_values)

    @classmethod
    def from_topic_preferences(cls, topic_preferences=None):
        topic_values = {}
        for name, preference in topic_preferences or []:
            if not isinstance(name, str) or not name.strip():
                raise InvalidTopicPreferences(f"Topic name must be a non-empty string, got {name!r}")
            column = f"{TOPIC_PREFIX}{name}"
            if column in topic_values:
                raise InvalidTopicPreferences(f"Topic '{name}' is configured more than once")
            topic_values[column] = TopicPreference.parse(preference).value
        return cls(topic_values)

    @property
    def topic_columns(self):
        return list(self.topic_values)

    def build_row(self, email_address):
        """Returns the SES row for one contact."""
        row = {
            "emailAddress": email_address,
            "unsubscribeAll": "false",
            "attributesData": None,
        }
        row.update(self.topic_values)
        return row
