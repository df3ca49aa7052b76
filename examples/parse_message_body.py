"""Message body example for attributed-body.

This example demonstrates how to:
- Read messages from a copy of an iMessage ``chat.db``
- Turn each ``attributedBody`` blob into body components
- Overlay unsent parts from ``message_summary_info``
"""

import argparse
import sqlite3
import sys

from attributed_body import (
    Attachment,
    EditedMessage,
    PlistParseException,
    Retracted,
    Text,
    configure_logging,
    disable_logging,
    parse_body,
)


QUERY = """
    SELECT ROWID, text, attributedBody, message_summary_info
    FROM message
    ORDER BY ROWID DESC
    LIMIT 20
"""


def describe(component, text):
    if isinstance(component, Text):
        return " | ".join(
            f"{attr.slice(text)!r} {type(attr.effect).__name__}"
            for attr in component.attributes
        )
    if isinstance(component, Attachment):
        return f"attachment {component.guid or '<unknown>'}"
    if isinstance(component, Retracted):
        return "unsent"
    return "app"


def main():
    parser = argparse.ArgumentParser(description="Print message bodies from chat.db")
    parser.add_argument("database", help="Path to a copy of chat.db")
    parser.add_argument("--log-level", default="DEBUG", help="Package log level")
    parser.add_argument("--quiet", action="store_true", help="Disable package logging")
    args = parser.parse_args()

    # Fallback decisions are logged at DEBUG
    configure_logging(level=args.log_level)
    if args.quiet:
        disable_logging()

    connection = sqlite3.connect(args.database)
    try:
        for rowid, text, blob, summary in connection.execute(QUERY):
            edited = None
            if summary:
                try:
                    edited = EditedMessage.from_bytes(summary)
                except PlistParseException as e:
                    print(f"[{rowid}] bad edit history: {e}")

            components = parse_body(text, blob, edited)
            print(f"[{rowid}] {text!r}")
            for component in components:
                print(f"    {describe(component, text or '')}")
    finally:
        connection.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
