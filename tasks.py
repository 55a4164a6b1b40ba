from invoke import task
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.absolute()


def project_relative(path):
    """Convert a relative path to an absolute path relative to the project root."""
    return str(PROJECT_ROOT / path)


@task
def shell(c):
    """Start Django shell."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} shell")


@task
def test(c, path=None):
    """Run Django tests. Optionally specify a specific test path."""
    manage_py = project_relative("manage.py")
    settings = "--settings=olympiads.test_settings"
    if path:
        c.run(f"python {manage_py} test {settings} {path}")
    else:
        c.run(f"python {manage_py} test {settings}")


@task
def seed(c, players=None, snapshot=None):
    """Seed the snapshot file with a demo olympiad."""
    manage_py = project_relative("manage.py")
    args = ""
    if players:
        args += f" --players {players}"
    if snapshot:
        args += f" --snapshot {snapshot}"
    c.run(f"python {manage_py} seed_olympiad{args}")


@task
def leaderboard(c, olympiad=None, activity=None, all_olympiads=False, matches=False):
    """Print a leaderboard: an olympiad, one of its activities, or an activity globally."""
    manage_py = project_relative("manage.py")
    args = ""
    if olympiad:
        args += f" --olympiad {olympiad}"
    if activity:
        args += f" --activity {activity}"
    if all_olympiads:
        args += " --global"
    if matches:
        args += " --matches"
    c.run(f"python {manage_py} leaderboard{args}")


@task
def lb(c, olympiad=None, activity=None):
    """Alias for leaderboard."""
    leaderboard(c, olympiad=olympiad, activity=activity)
