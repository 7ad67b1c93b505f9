import codecs
import csv
from pathlib import Path

from mailchimp_ses.errors import DecodeError, InputNotFound, MalformedRow, OutputWriteFailed
from mailchimp_ses.topics import SesContactSchema

# Columns of a Mailchimp audience export. Only "Email Address" is used, the
# rest are accepted and ignored.
MAILCHIMP_EMAIL_COLUMN = "Email Address"
MAILCHIMP_COLUMNS = [
    "Email Address", "First Name", "Last Name", "Address", "Phone Number",
    "Birthday", "MEMBER_RATING", "OPTIN_TIME", "OPTIN_IP", "CONFIRM_TIME",
    "CONFIRM_IP", "LATITUDE", "LONGITUDE", "GMTOFF", "DSTOFF", "TIMEZONE",
    "CC", "REGION", "LAST_CHANGED", "LEID", "EUID", "NOTES", "TAGS",
]


def decode_lines(binfile, source=None):
    """
    Decodes a binary export one line at a time, so bad UTF-8 is reported
    with the line it sits on. A leading byte order mark is dropped.
    """
    source = source or getattr(binfile, "name", "<stream>")
    for line_number, raw in enumerate(binfile, 1):
        if line_number == 1 and raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8):]
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(source, line_number, str(e)) from e


def read_mailchimp_contacts(infile, source=None):
    """
    Yields one {column: value} dict per data row of a Mailchimp export.

    `infile` is any iterable of text lines. The first non-blank row is the
    header. A row whose field count differs from the header raises
    MalformedRow. Blank lines are skipped, except in a single column export
    where a blank line is a contact with an empty address.
    """
    source = source or getattr(infile, "name", "<stream>")
    reader = csv.reader(infile, strict=True)
    try:
        header = next(reader, None)
        while header == []:
            header = next(reader, None)
        if header is None:
            return
        for row in reader:
            if not row:
                if len(header) > 1:
                    continue
                row = [""]
            if len(row) != len(header):
                raise MalformedRow(
                    source, reader.line_num,
                    f"expected {len(header)} fields, found {len(row)}"
                )
            yield dict(zip(header, row))
    except csv.Error as e:
        raise MalformedRow(source, reader.line_num, str(e)) from e
    except UnicodeDecodeError as e:
        raise DecodeError(source, reader.line_num, str(e)) from e
    except OSError as e:
        raise InputNotFound(source, e) from e


def format_contact(mailchimp_contact, schema):
    """Maps a Mailchimp contact to an SES contact list row."""
    return schema.build_row(mailchimp_contact.get(MAILCHIMP_EMAIL_COLUMN, ""))


def convert(input_filename, output_filename, topic_preferences=None, on_contact=None):
    """
    Converts a Mailchimp audience export into a CSV importable as an AWS SES
    contact list, one row at a time.

    Args:
        input_filename: Path of the Mailchimp CSV export.
        output_filename: Path of the SES import CSV, created or overwritten.
        topic_preferences: Ordered (topic_name, preference) pairs. Every
            contact gets a topicPreferences.<topic_name> column set to
            OPT_IN or OPT_OUT.
        on_contact: Optional callable, called with the number of contacts
            written so far after each row.

    Returns:
        The output path.

    Raises:
        InvalidTopicPreferences, InputNotFound, OutputWriteFailed,
        MalformedRow or DecodeError. The first error ends the run, and a
        partially written output file may be left behind.
    """
    schema = SesContactSchema.from_topic_preferences(topic_preferences)
    input_path = Path(input_filename)
    output_path = Path(output_filename)

    try:
        binfile = open(input_path, mode="rb")
    except OSError as e:
        raise InputNotFound(input_path, e) from e

    with binfile:
        try:
            with open(output_path, mode="w", encoding="utf-8", newline="") as outfile:
                writer = csv.DictWriter(outfile, fieldnames=schema.fieldnames, lineterminator="\n")
                writer.writeheader()

                count = 0
                lines = decode_lines(binfile, input_path)
                for contact in read_mailchimp_contacts(lines, input_path):
                    writer.writerow(format_contact(contact, schema))
                    count += 1
                    if on_contact:
                        on_contact(count)
        except OSError as e:
            raise OutputWriteFailed(output_path, e) from e

    return output_filename
