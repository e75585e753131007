#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from laakhay.salespad import SalesPadClient, SalesPadConfig


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List SalesPad inventory with per-location stock")
    p.add_argument("query", nargs="?", default="", help="OData $filter, e.g. \"Item_Class eq 'WIDGET'\"")
    p.add_argument("limit", nargs="?", type=int, default=25)
    p.add_argument("--host", default=os.environ.get("SALESPAD_HOST", ""))
    p.add_argument("--page-size", type=int, default=100)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    config = SalesPadConfig(host=args.host, page_size=args.page_size)
    async with SalesPadClient(config) as sp:
        await sp.login(os.environ["SALESPAD_USERNAME"], os.environ["SALESPAD_PASSWORD"])
        items = await sp.inventory.search(args.query)
        print(f"{'Item':20} | {'Location':12} | {'On Hand':>10}")
        print("-" * 48)
        shown = 0
        async for item in items:
            for location in item.Locations:
                print(
                    f"{item.id:20} | {location.get('Location', item.Location) or '':12} | "
                    f"{location.get('Qty_On_Hand', item.Qty_On_Hand) or 0:>10}"
                )
            shown += 1
            if shown >= args.limit:
                break


if __name__ == "__main__":
    asyncio.run(main())
