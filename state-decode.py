#!/usr/bin/env python3
import sys
import json
from grid_state import DEFAULT_GRID_SIZE, parse_grid_size
from state_serializer import deserialize

def decode_state(encoded_state: str, size=DEFAULT_GRID_SIZE) -> dict:
    # Invalid tokens decode to an empty grid rather than an error
    return deserialize(encoded_state, parse_grid_size(size)).to_dict()

def main():
    if len(sys.argv) not in (2, 3):
        print(f"Usage: {sys.argv[0]} <encoded_state> [grid_size]", file=sys.stderr)
        sys.exit(1)
    encoded_state = sys.argv[1]
    size = sys.argv[2] if len(sys.argv) == 3 else DEFAULT_GRID_SIZE
    decoded = decode_state(encoded_state, size)
    print(json.dumps(decoded, separators=(",", ":")))

if __name__ == "__main__":
    main()
