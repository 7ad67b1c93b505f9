"""Errors raised while converting a Mailchimp export into an SES contact list."""


class ConversionError(Exception):
    """Base class for every failure of a conversion run."""


class InvalidTopicPreferences(ConversionError, ValueError):
    """The topic preference configuration can't be turned into SES columns."""


class InputNotFound(ConversionError):
    """The Mailchimp export is missing or can't be read."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read Mailchimp export '{path}': {reason}")


class OutputWriteFailed(ConversionError):
    """The SES import file can't be created or written."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write SES contact list '{path}': {reason}")


class MalformedRow(ConversionError):
    """A CSV row that breaks the header's structure."""

    def __init__(self, path, line_number, reason):
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Malformed row at line {line_number} of '{path}': {reason}")


class DecodeError(ConversionError):
    """The export contains bytes that are not valid UTF-8."""

    def __init__(self, path, line_number, reason):
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Invalid UTF-8 at line {line_number} of '{path}': {reason}")
