"""Administrative commands for the fursuit badge store."""

from __future__ import annotations

import argparse
import asyncio
import base64
import sys
from pathlib import Path
from typing import Iterable, Sequence

from badge_registry.db.session import get_engine, init_db
from badge_registry.domain.records import BadgeRecord
from badge_registry.imgproc.normalize import DecodeError
from badge_registry.monitoring.logging import configure_logging
from badge_registry.services.badges import BadgeNotFoundError, RegistrationCoordinator
from badge_registry.services.registration import BadgeRegistration
from badge_registry.services.wiring import build_coordinator
from badge_registry.storage.base import StoreError


def _format_badge(record: BadgeRecord) -> str:
    visibility = "public" if record.is_public else "hidden"
    return f"{record.id}  #{record.external_reference}  {record.name} ({record.species})  {visibility}"


def print_badges(records: Iterable[BadgeRecord]) -> None:
    for record in sorted(records, key=lambda item: int(item.external_reference)):
        print(_format_badge(record))


async def _list(coordinator: RegistrationCoordinator, _: argparse.Namespace) -> int:
    print_badges(await coordinator.list_all())
    return 0


async def _register(coordinator: RegistrationCoordinator, args: argparse.Namespace) -> int:
    photo = await asyncio.to_thread(Path(args.photo).read_bytes)
    registration = BadgeRegistration(
        badge_no=args.badge_no,
        reg_no=args.reg_no,
        gender=args.gender,
        name=args.name,
        species=args.species,
        dont_publish=1 if args.hidden else 0,
        worn_by=args.worn_by,
        image_content=base64.b64encode(photo).decode("ascii"),
    )
    print(f"Registering badge #{args.badge_no} from {args.photo}...")
    try:
        badge_id = await coordinator.upsert(registration)
    except (DecodeError, StoreError) as exc:
        print(f"Registration failed: {exc}", file=sys.stderr)
        return 1
    image = await coordinator.get_image_record(badge_id)
    fingerprint = image.source_content_hash_sha1 if image else None
    print(f"Badge {badge_id} has photo hash={fingerprint}")
    return 0


async def _show(coordinator: RegistrationCoordinator, args: argparse.Namespace) -> int:
    try:
        record = await coordinator.get_badge(args.badge_id)
    except BadgeNotFoundError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(_format_badge(record))
    print(f"  owner={record.owner_uid} gender={record.gender} worn_by={record.worn_by}")
    print(f"  last changed at {record.last_change_at} UTC")
    return 0


async def _export_image(coordinator: RegistrationCoordinator, args: argparse.Namespace) -> int:
    content = await coordinator.get_image_bytes(args.badge_id)
    if content is None:
        print(f"No image stored for badge {args.badge_id}.", file=sys.stderr)
        return 1
    await asyncio.to_thread(Path(args.output).write_bytes, content)
    print(f"Wrote {len(content)} bytes to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List all badges.")
    list_cmd.set_defaults(handler=_list)

    register_cmd = commands.add_parser("register", help="Register or update a badge from a photo file.")
    register_cmd.add_argument("--badge-no", type=int, required=True)
    register_cmd.add_argument("--reg-no", type=int, required=True)
    register_cmd.add_argument("--name", required=True)
    register_cmd.add_argument("--species", required=True)
    register_cmd.add_argument("--gender", default="")
    register_cmd.add_argument("--worn-by", default="")
    register_cmd.add_argument("--hidden", action="store_true", help="Do not publish the badge.")
    register_cmd.add_argument("--photo", required=True, help="Path to the source photo.")
    register_cmd.set_defaults(handler=_register)

    show_cmd = commands.add_parser("show", help="Show one badge.")
    show_cmd.add_argument("badge_id")
    show_cmd.set_defaults(handler=_show)

    export_cmd = commands.add_parser("export-image", help="Write the rendered badge photo to a file.")
    export_cmd.add_argument("badge_id")
    export_cmd.add_argument("output")
    export_cmd.set_defaults(handler=_export_image)

    return parser


async def run(argv: Sequence[str] | None = None, coordinator: RegistrationCoordinator | None = None) -> int:
    args = build_parser().parse_args(argv)
    if coordinator is not None:
        return await args.handler(coordinator, args)

    engine = get_engine()
    try:
        await init_db(engine)
        return await args.handler(build_coordinator(engine), args)
    finally:
        await engine.dispose()


def main() -> None:
    configure_logging()
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
