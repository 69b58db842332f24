"""
Maintenance commands.

    python scripts/manage.py create-admin --username alex
    python scripts/manage.py geocode [--all]

``create-admin`` prompts for the password. ``geocode`` fills in coordinates
for properties that have none (or every property with ``--all``) using the
configured Google Geocoding key.
"""

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from urbanliving.core.config import Settings, get_settings
from urbanliving.core.exceptions import ValidationException
from urbanliving.core.logging import log, setup_logging
from urbanliving.models import Property
from urbanliving.services.database import build_engine, build_session_factory, init_models
from urbanliving.services.geocoding import GeocodingClient, full_address
from urbanliving.services.users import create_user

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


async def regeocode_properties(
    db: AsyncSession, geocoder: GeocodingClient, only_missing: bool = True
) -> int:
    """
    Geocode properties and store their coordinates.

    Returns:
        Number of properties updated
    """
    query = select(Property).order_by(Property.id)
    if only_missing:
        query = query.where(or_(Property.latitude.is_(None), Property.longitude.is_(None)))

    updated = 0
    for prop in (await db.execute(query)).scalars():
        coordinates = geocoder.geocode(full_address(prop.address, prop.city, prop.state))
        if coordinates is None:
            log.warning(f"No coordinates for property {prop.id} ({prop.name})")
            continue
        prop.latitude, prop.longitude = coordinates
        updated += 1
        log.info(f"Property {prop.id} ({prop.name}) -> {prop.latitude},{prop.longitude}")

    await db.commit()
    return updated


async def _create_admin(settings: Settings, username: str, password: str) -> None:
    engine = build_engine(settings)
    try:
        await init_models(engine)
        async with build_session_factory(engine)() as db:
            await create_user(db, username, password)
            await db.commit()
    finally:
        await engine.dispose()


async def _geocode(settings: Settings, only_missing: bool) -> int:
    if not settings.GOOGLE_GEOCODING_API_KEY:
        raise ValidationException("GOOGLE_GEOCODING_API_KEY is not set")
    engine = build_engine(settings)
    try:
        async with build_session_factory(engine)() as db:
            return await regeocode_properties(
                db, GeocodingClient(settings.GOOGLE_GEOCODING_API_KEY), only_missing
            )
    finally:
        await engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UrbanLiving maintenance commands")
    commands = parser.add_subparsers(dest="command", required=True)

    admin = commands.add_parser("create-admin", help="Create an admin dashboard account")
    admin.add_argument("--username", required=True)
    admin.add_argument("--password", help="Prompted for when omitted")

    geocode = commands.add_parser("geocode", help="Fill in property coordinates")
    geocode.add_argument(
        "--all", action="store_true", help="Re-geocode properties that already have coordinates"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    try:
        if args.command == "create-admin":
            password = args.password or getpass.getpass("Password: ")
            asyncio.run(_create_admin(settings, args.username, password))
            print(f"{GREEN}Created admin user {args.username}{RESET}")
        elif args.command == "geocode":
            count = asyncio.run(_geocode(settings, only_missing=not args.all))
            print(f"{GREEN}Updated coordinates for {count} properties{RESET}")
    except ValidationException as e:
        print(f"{RED}ERROR: {e.message}{RESET}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
