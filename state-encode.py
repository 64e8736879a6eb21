#!/usr/bin/env python3
import sys
import json
from grid_state import GridRecord, GridState, parse_grid_size
from state_serializer import build_query

def encode_state(json_str: str) -> str:
    # {"size": 16, "records": [0, 5, {"index": 2, "color": "#ff0000"}]}
    obj = json.loads(json_str)
    records = []
    for item in obj.get("records", []):
        if isinstance(item, dict):
            records.append(GridRecord(int(item["index"]), item.get("color")))
        else:
            records.append(GridRecord(int(item)))
    state = GridState(parse_grid_size(obj.get("size")), records)
    return build_query(state)

def main():
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} '<json_string>'", file=sys.stderr)
        sys.exit(1)

    json_str = sys.argv[1]
    encoded = encode_state(json_str)
    print(encoded)

if __name__ == "__main__":
    main()
