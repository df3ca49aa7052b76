"""Typedstream example for attributed-body.

This example demonstrates how to:
- Load decoder limits from a YAML file
- Decode a raw typedstream archive into records
- Inspect the shared type and object tables
"""

import sys

from attributed_body import AttributedBodyConfig, TypedStreamException, TypedStreamReader


def main():
    if len(sys.argv) < 2:
        print("Usage: python decode_archive.py <archive> [config.yml]")
        return 1

    config = AttributedBodyConfig()
    if len(sys.argv) > 2:
        config = AttributedBodyConfig.from_yaml(sys.argv[2])

    with open(sys.argv[1], "rb") as f:
        data = f.read()

    reader = TypedStreamReader(data, config.decoder)
    try:
        records = reader.parse()
    except TypedStreamException as e:
        print(f"Decode failed: {e}")
        return 2

    print(f"{len(records)} records")
    for index, record in enumerate(records):
        print(f"  {index:3d} {record}")

    print(f"\n{len(reader.type_table)} type signatures")
    print(f"{len(reader.object_table)} objects")
    return 0


if __name__ == "__main__":
    sys.exit(main())
