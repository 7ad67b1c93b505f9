import sys
import argparse

# Rich library imports for UI
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from mailchimp_ses.converter import convert
from mailchimp_ses.errors import ConversionError
from mailchimp_ses.settings import load_settings
from mailchimp_ses.topics import SesContactSchema, parse_topic_spec

console = Console()


def build_parser(settings):
    parser = argparse.ArgumentParser(
        description="Convert a Mailchimp audience export into a CSV importable as an AWS SES contact list."
    )
    parser.add_argument("input", nargs="?", default=settings["input_file"],
                        help=f"Mailchimp CSV export (default: {settings['input_file']})")
    parser.add_argument("output", nargs="?", default=settings["output_file"],
                        help=f"SES contact list CSV to write (default: {settings['output_file']})")
    parser.add_argument("--topic", action="append", default=None, metavar="NAME=OPT_IN|OPT_OUT",
                        help="Topic preference applied to every contact. Repeat for several topics.")
    parser.add_argument("--quiet", action="store_true", help="Only print errors")
    return parser


def print_columns(topic_preferences):
    schema = SesContactSchema.from_topic_preferences(topic_preferences)
    table = Table(title="SES contact list columns")
    table.add_column("Column", style="cyan")
    table.add_column("Value", style="white")
    sample = schema.build_row("<Email Address>")
    for column in schema.fieldnames:
        value = sample[column]
        table.add_row(escape(column), "" if value is None else value)
    console.print(table)


def run(args, topic_preferences):
    if args.quiet:
        return convert(args.input, args.output, topic_preferences)

    console.print(f"[bold blue]🚀 Converting[/bold blue] {escape(str(args.input))} [bold blue]→[/bold blue] {escape(str(args.output))}")
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task_id = progress.add_task("[cyan]Writing contacts...", total=None)
        written = {"count": 0}

        def on_contact(count):
            written["count"] = count
            progress.update(task_id, description=f"[cyan]Writing contacts... {count}")

        output = convert(args.input, args.output, topic_preferences, on_contact=on_contact)

    print_columns(topic_preferences)
    console.print(
        f"[bold green]✅ Wrote {written['count']} contacts[/bold green] to [underline]{escape(str(output))}[/underline]"
    )
    return output


def main(argv=None):
    try:
        settings = load_settings()
        args = build_parser(settings).parse_args(argv)
        if args.topic is not None:
            topic_preferences = [parse_topic_spec(spec) for spec in args.topic]
        else:
            topic_preferences = settings["topic_preferences"]
        run(args, topic_preferences)
    except ConversionError as e:
        console.print(f"[bold red]❌ {escape(str(e))}[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
