import pytest


@pytest.fixture
def mailchimp_export(tmp_path):
    """Return a function that writes a Mailchimp export and returns its path."""
    def write(content, name="mailchimp_export.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return path
    return write


@pytest.fixture
def ses_output(tmp_path):
    """Return the path the SES contact list gets written to."""
    return tmp_path / "ses_contacts.csv"
