#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from laakhay.salespad import Customer, SalesPadClient, SalesPadConfig, SessionType


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Look up a SalesPad customer and its addresses")
    p.add_argument("customer_num")
    p.add_argument("--host", default=os.environ.get("SALESPAD_HOST", ""))
    p.add_argument("--session-id", default=os.environ.get("SALESPAD_SESSION_ID"))
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with SalesPadClient(SalesPadConfig(host=args.host)) as sp:
        if args.session_id:
            await sp.restart(args.session_id)
        else:
            await sp.login(
                os.environ["SALESPAD_USERNAME"],
                os.environ["SALESPAD_PASSWORD"],
                SessionType.TEMPORARY,
            )
        sp.map(Customer, {"Customer_Name": "name"})

        customer = await sp.customers.get(args.customer_num)
        if customer is None:
            print(f"Customer {args.customer_num} not found")
            return
        print(customer)
        print()
        for address in await sp.customers.addresses(customer):
            print(f"{address.id:15} {address.City or ''}, {address.State or ''}")


if __name__ == "__main__":
    asyncio.run(main())
