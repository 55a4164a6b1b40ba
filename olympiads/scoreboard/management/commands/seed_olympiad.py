"""
Django management command to seed a scoreboard snapshot with a demo olympiad.

Creates the players, an olympiad using every default activity and a few
random matches per event, then saves the snapshot.
"""

import random

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from olympiads.scoring_core.results import Classement, Duel, NumericScore, ScoreEntry, team_game
from olympiads.scoring_core.rules import EventType
from olympiads.scoreboard.repository import JsonFileRepository
from olympiads.scoreboard.snapshot import SnapshotError
from olympiads.scoreboard.store import OlympiadStore

DEFAULT_PLAYERS = "Alice,Bob,Charlie,Diane,Etienne,Fanny"


class Command(BaseCommand):
    help = "Seed a scoreboard snapshot with a demo olympiad"

    def add_arguments(self, parser):
        parser.add_argument(
            "--snapshot",
            type=str,
            help="Path to the snapshot file (default: OLYMPIADS_SNAPSHOT_PATH)",
        )
        parser.add_argument(
            "--title", type=str, default="Olympiades d'été", help="Olympiad title"
        )
        parser.add_argument(
            "--players",
            type=str,
            default=DEFAULT_PLAYERS,
            help="Comma-separated player names",
        )
        parser.add_argument(
            "--matches", type=int, default=3, help="Matches to record per event"
        )
        parser.add_argument("--seed", type=int, help="Random seed for reproducible results")

    def handle(self, *args, **options):
        path = options["snapshot"] or settings.OLYMPIADS_SNAPSHOT_PATH
        rng = random.Random(options["seed"])

        names = [n.strip() for n in options["players"].split(",") if n.strip()]
        if len(names) < 2:
            raise CommandError("At least two players are needed")

        store = OlympiadStore(JsonFileRepository(path))
        try:
            players = [store.add_player(name) for name in names]
        except SnapshotError as e:
            raise CommandError(f"Could not read snapshot: {e}")

        player_ids = [p.id for p in players]
        olympiad_id = store.create_olympiad(options["title"], player_ids)
        if not olympiad_id:
            raise CommandError("Olympiad title must not be blank")

        for activity in store.state.activities:
            instance = store.add_activity_to_olympiad(olympiad_id, activity.id)
            for _ in range(options["matches"]):
                result = self._random_result(instance, player_ids, rng)
                if result is not None:
                    store.add_match(olympiad_id, instance.id, result)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded olympiad {olympiad_id} with {len(players)} players in {path}"
            )
        )

    def _random_result(self, instance, player_ids, rng):
        shuffled = rng.sample(player_ids, len(player_ids))
        if instance.type == EventType.CLASSEMENT:
            return Classement(shuffled)
        elif instance.type == EventType.DUEL_1V1:
            return Duel(shuffled[0], shuffled[1])
        elif instance.type == EventType.EQUIPE:
            size = min(instance.team_size or 2, len(shuffled) // 2)
            return team_game(shuffled[:size], shuffled[size : size * 2])
        return NumericScore(
            [ScoreEntry(pid, round(rng.uniform(0, 100), 1)) for pid in shuffled]
        )
