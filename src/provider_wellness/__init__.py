"""Search and ROI projection core for the provider wellness resource site."""

from .content import ContentIndex
from .roi import ModelAssumptions, OrgDetails, RoiResult, project
from .scenarios import run_scenarios
from .schema import ScoredResult, SearchCandidate, SearchResponse, SourceType
from .search import SearchEngine

__all__ = [
    "ContentIndex",
    "SearchEngine",
    "SearchCandidate",
    "ScoredResult",
    "SearchResponse",
    "SourceType",
    "OrgDetails",
    "ModelAssumptions",
    "RoiResult",
    "project",
    "run_scenarios",
]
