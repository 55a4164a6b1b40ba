from django.apps import AppConfig


class ScoringCoreConfig(AppConfig):
    name = 'olympiads.scoring_core'
    verbose_name = 'Olympiad Scoring Logic'
