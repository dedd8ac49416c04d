"""VolleyScout data models — Pydantic schemas for the entire platform."""

from volleyscout.models.court import *
from volleyscout.models.events import *
from volleyscout.models.match import *
from volleyscout.models.stats import *
from volleyscout.models.snapshot import *
