#!/usr/bin/env python3
"""
Print main boards with their "Subitems of ..." boards nested underneath.

Usage:
  python -m scripts.print_board_tree
  python -m scripts.print_board_tree --user-id 12345678
"""

from __future__ import annotations

import argparse
from dotenv import load_dotenv

from monday_dash.boards import board_items, build_board_tree, filter_boards_by_user, is_subitem_board
from monday_dash.client import MondayClient
from monday_dash.config import load_settings, require_env


def main() -> None:
    load_dotenv()

    ap = argparse.ArgumentParser()
    ap.add_argument("--user-id", help="Only boards this user owns or subscribes to")
    args = ap.parse_args()

    require_env("MONDAY_API_TOKEN")
    client = MondayClient.from_settings(load_settings())

    boards = filter_boards_by_user(client.boards(), args.user_id)
    tree = build_board_tree(boards)

    nested_names = {s.get("name") for b in tree for s in b["subitems"]}
    orphans = [b for b in boards if is_subitem_board(b) and b.get("name") not in nested_names]

    print("=" * 80)
    print(f"Main boards: {len(tree)}  (flat list: {len(boards)})")
    print("=" * 80)

    for b in tree:
        print(f"- {b.get('name')}  |  id={b.get('id')}  |  items={b['totalItems']}")
        for s in b["subitems"]:
            print(f"    + {s.get('name')}  |  id={s.get('id')}  |  items={len(board_items(s))}")

    if orphans:
        print("-" * 80)
        print("Subitem boards with no matching main board (not shown in the dashboard):")
        for s in orphans:
            print(f"  ? {s.get('name')}  |  id={s.get('id')}")

    print("=" * 80)


if __name__ == "__main__":
    main()
