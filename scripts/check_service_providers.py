#!/usr/bin/env python3
"""
List active services of an organization that have no associated providers.
Availability for such services always comes back with noProvidersAssociated.
Usage: python -m scripts.check_service_providers <organization_id>
"""

import argparse
import asyncio
import logging
import sys

from app.core.db import async_session_maker
from app.services.availability_service import services_without_providers
from app.services.schedule_store import SqlScheduleStore

logger = logging.getLogger(__name__)


async def check_service_providers(organization_id: str) -> int:
    async with async_session_maker() as session:
        rows = await services_without_providers(SqlScheduleStore(session), organization_id)
    if not rows:
        print(f"All active services of organization {organization_id} have at least one provider.")
        return 0
    print(f"{len(rows)} service(s) without providers in organization {organization_id}:")
    for r in rows:
        print(f"  - {r['name']} ({r['id']}, {r['duration_minutes']} min)")
    print("Associate providers in service_providers before these services can be booked.")
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("organization_id")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    return asyncio.run(check_service_providers(args.organization_id))


if __name__ == "__main__":
    sys.exit(main())
