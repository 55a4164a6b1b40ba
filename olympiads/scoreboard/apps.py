from django.apps import AppConfig


class ScoreboardConfig(AppConfig):
    name = 'olympiads.scoreboard'
    verbose_name = 'Olympiad Scoreboard'
