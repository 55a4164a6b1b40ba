"""
Django management command to print olympiad leaderboards.

Reads a scoreboard snapshot and prints one of the three leaderboards:
the whole olympiad, one activity within it, or one activity across every
olympiad (--global).
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from olympiads.scoring_core.rules import describe_rule
from olympiads.scoreboard.repository import JsonFileRepository
from olympiads.scoreboard.snapshot import SnapshotError
from olympiads.scoreboard.store import OlympiadStore


class Command(BaseCommand):
    help = "Print olympiad leaderboards from a scoreboard snapshot"

    def add_arguments(self, parser):
        parser.add_argument(
            "--snapshot",
            type=str,
            help="Path to the snapshot file (default: OLYMPIADS_SNAPSHOT_PATH)",
        )
        parser.add_argument(
            "--olympiad",
            type=str,
            help="Olympiad id (default: the current olympiad)",
        )
        parser.add_argument(
            "--activity",
            type=str,
            help="Only count events of this activity id",
        )
        parser.add_argument(
            "--global",
            action="store_true",
            dest="global_",
            help="Count the activity across all olympiads (requires --activity)",
        )
        parser.add_argument(
            "--matches",
            action="store_true",
            help="Also list the recorded matches of each counted event",
        )
        parser.add_argument(
            "--score-numeric",
            action="store_true",
            help="Score numeric results against numeric ranking rules",
        )

    def handle(self, *args, **options):
        path = options["snapshot"] or settings.OLYMPIADS_SNAPSHOT_PATH
        score_numeric = options["score_numeric"] or settings.OLYMPIADS_SCORE_NUMERIC_RESULTS
        activity_id = options["activity"]

        store = OlympiadStore(JsonFileRepository(path), score_numeric=score_numeric)
        try:
            state = store.state
        except (SnapshotError, OSError) as e:
            raise CommandError(f"Could not read snapshot: {e}")

        if activity_id and state.activity(activity_id) is None:
            raise CommandError(f"Activity not found: {activity_id}")

        if options["global_"]:
            if not activity_id:
                raise CommandError("--global requires --activity")
            activity = state.activity(activity_id)
            self.stdout.write(f"{activity.name} - all olympiads")
            self._print_leaderboard(state, store.global_activity_leaderboard(activity_id))
            return

        olympiad_id = options["olympiad"] or state.current_olympiad_id
        if olympiad_id is None:
            raise CommandError("No olympiad given and no current olympiad")
        olympiad = state.olympiad(olympiad_id)
        if olympiad is None:
            raise CommandError(f"Olympiad not found: {olympiad_id}")

        if activity_id:
            self.stdout.write(f"{olympiad.title} - {state.activity(activity_id).name}")
            leaderboard = store.activity_leaderboard(olympiad_id, activity_id)
            instances = olympiad.instances_of(activity_id)
        else:
            self.stdout.write(olympiad.title)
            leaderboard = store.olympiad_leaderboard(olympiad_id)
            instances = olympiad.event_instances

        self._print_leaderboard(state, leaderboard)

        if options["matches"]:
            for instance in instances:
                self.stdout.write("")
                self.stdout.write(f"{instance.name} ({describe_rule(instance.rule)})")
                for summary in store.match_summaries(olympiad_id, instance.id):
                    self.stdout.write(f"  {summary}")

    def _print_leaderboard(self, state, leaderboard):
        if not leaderboard:
            self.stdout.write(self.style.WARNING("No scores yet"))
            return

        for entry in leaderboard:
            self.stdout.write(
                f"{entry.rank:>3}. {state.player_name(entry.player_id):<20} {entry.points:>5}"
            )
