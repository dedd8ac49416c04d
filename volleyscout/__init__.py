"""
VolleyScout — Live volleyball match scouting
=============================================
Rally-by-rally event log with derived score, serve possession and
lineup rotation, undo/redo history, and team/player statistics.
"""

__version__ = "1.0.0"
__app_name__ = "VolleyScout"
