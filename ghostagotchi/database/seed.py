"""
Demo Data Seeder
================

Creates five demo owners, each with a profile, a ghost and a short chat
history, then prints a leaderboard preview. Owners that already have a pet
are skipped, so running it twice is safe.

USAGE:
  ghostagotchi-seed                  # seed pets, profiles and messages
  ghostagotchi-seed --skip-messages  # pets and profiles only
"""

import argparse
import asyncio
import random
import sys
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import List, Optional, Sequence, Tuple

from ghostagotchi.core.database.base import utc_now
from ghostagotchi.core.database.service import DatabaseService
from ghostagotchi.core.logging.logger import get_logger, shutdown_logging
from ghostagotchi.database.models import ChatMessage
from ghostagotchi.domain.models.pet import PetSnapshot
from ghostagotchi.domain.models.ranking import ANONYMOUS_OWNER
from ghostagotchi.modules.chat.repository import ChatMessageRepository
from ghostagotchi.modules.pet.repository import PetRepository
from ghostagotchi.modules.profile.repository import ProfileRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class DemoOwner:
    owner_id: str
    username: Optional[str]
    pet_name: str
    experience: int
    hunger: int
    mood: int


DEMO_OWNERS: Tuple[DemoOwner, ...] = (
    DemoOwner("00000000-0000-0000-0000-000000000001", "ghostmaster", "Casper", 450, 85, 90),
    DemoOwner("00000000-0000-0000-0000-000000000002", "spooky_friend", "Boo", 280, 60, 75),
    DemoOwner("00000000-0000-0000-0000-000000000003", "phantom_keeper", "Phantom", 650, 95, 100),
    DemoOwner("00000000-0000-0000-0000-000000000004", None, "Whisper", 150, 40, 50),
    DemoOwner("00000000-0000-0000-0000-000000000005", "ecto_enthusiast", "Ecto", 380, 70, 85),
)

SAMPLE_CHAT: Tuple[Tuple[str, str], ...] = (
    (ChatMessage.SENDER_USER, "Hello! How are you?"),
    (ChatMessage.SENDER_GHOST, "Boo! 👻 I'm doing great! Thanks for asking!"),
    (ChatMessage.SENDER_USER, "Want to play?"),
    (ChatMessage.SENDER_GHOST, "I'd love to! Let's have some spooky fun! 🎃"),
)


@dataclass
class SeedReport:
    pets_created: int = 0
    pets_skipped: int = 0
    messages_created: int = 0


async def seed_demo_data(
    owners: Sequence[DemoOwner] = DEMO_OWNERS, with_messages: bool = True
) -> SeedReport:
    """Insert the demo owners in one transaction."""
    pets = PetRepository(logger=get_logger(f"{__name__}.PetRepository"))
    profiles = ProfileRepository(logger=get_logger(f"{__name__}.ProfileRepository"))
    messages = ChatMessageRepository(logger=get_logger(f"{__name__}.ChatMessageRepository"))

    report = SeedReport()
    now = utc_now()

    async with DatabaseService.get_transaction() as session:
        for owner in owners:
            await profiles.ensure(session, owner.owner_id)
            if owner.username:
                await profiles.upsert_username(session, owner.owner_id, owner.username)

            if await pets.find_by_owner(session, owner.owner_id) is not None:
                report.pets_skipped += 1
                continue

            snapshot = replace(
                PetSnapshot.new(owner_id=owner.owner_id, name=owner.pet_name, now=now),
                experience=owner.experience,
                hunger=owner.hunger,
                mood=owner.mood,
            )
            pet = await pets.create(session, snapshot)
            pet.last_fed_at = now - timedelta(hours=random.uniform(0, 24))
            pet.last_played_at = now - timedelta(hours=random.uniform(0, 12))
            report.pets_created += 1

            if with_messages:
                for sender, text in SAMPLE_CHAT:
                    messages.create(session, pet.id, sender, text)
                report.messages_created += len(SAMPLE_CHAT)

    logger.info(
        "Demo data seeded",
        extra={
            "pets_created": report.pets_created,
            "pets_skipped": report.pets_skipped,
            "messages_created": report.messages_created,
        },
    )
    return report


async def leaderboard_preview(limit: int = 5) -> List[str]:
    pets = PetRepository(logger=get_logger(f"{__name__}.PetRepository"))
    async with DatabaseService.get_session() as session:
        top = await pets.list_ordered(session, limit)
        return [
            f"{rank}. {pet.name} - Level {pet.level} ({pet.experience} XP) - Owner: "
            f"{(pet.profile.username if pet.profile else None) or ANONYMOUS_OWNER}"
            for rank, pet in enumerate(top, start=1)
        ]


async def _run(args: argparse.Namespace) -> None:
    await DatabaseService.initialize()
    try:
        await DatabaseService.create_schema()

        print("🌱 Seeding database...")
        report = await seed_demo_data(with_messages=not args.skip_messages)

        print("\n📊 Summary:")
        print(f"   - {report.pets_created} pets created, {report.pets_skipped} already present")
        print(f"   - {report.messages_created} messages created")

        print("\n🏆 Leaderboard preview:")
        for line in await leaderboard_preview():
            print(f"   {line}")
    finally:
        await DatabaseService.shutdown()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Seed Ghostagotchi with demo owners and pets.")
    parser.add_argument(
        "--skip-messages",
        action="store_true",
        help="Do not create the sample chat history",
    )
    args = parser.parse_args(argv)

    try:
        asyncio.run(_run(args))
    except Exception as exc:
        logger.critical(f"Seeding failed: {exc}", exc_info=True)
        sys.exit(1)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
