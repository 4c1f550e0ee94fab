"""
Statistics catalog.

Maps each ``StatisticName`` to its aggregation pipeline over the analysis
collection. Entries are built once at import time and never mutated; time
filters are generated per request and prepended by the caller.
"""

from types import MappingProxyType
from typing import Mapping, Union

from scanstats.entities.enums import AnalysisResult, StatisticName
from scanstats.pipeline.generators import count_aggregation
from scanstats.pipeline.stages import Pipeline, group, match, project, unwind
from scanstats.services.exceptions import UnknownStatisticError

RESULTS_FIELD = "huskyciresults"

# Stored by the API when an analysis produced no results at all.
EMPTY_RESULTS_SENTINEL = "{}"


def _analysis_pipeline() -> Pipeline:
    return (
        project({"finishedAt": 1, "result": 1}),
        group({"_id": "$result", "count": {"$sum": 1}}),
        project({"count": 1, "result": "$_id", "_id": 0}),
    )


def _repository_pipeline() -> Pipeline:
    return (
        match({"repositoryURL": {"$exists": True}}),
        match({"repositoryBranch": {"$exists": True}}),
        # One document per distinct (repository, branch)
        group(
            {
                "_id": {
                    "repositoryBranch": "$repositoryBranch",
                    "repositoryURL": "$repositoryURL",
                },
            }
        ),
        group(
            {
                "_id": {"repositoryURL": "$_id.repositoryURL"},
                "branches": {"$sum": 1},
            }
        ),
        group(
            {
                "_id": "repositories",
                "totalBranches": {"$sum": "$branches"},
                "totalRepositories": {"$sum": 1},
            }
        ),
        project({"_id": 0}),
    )


def _author_pipeline() -> Pipeline:
    return (
        project({"commitAuthors": 1}),
        unwind("commitAuthors"),
        group({"_id": "$commitAuthors"}),
        group({"_id": "commitAuthors", "totalAuthors": {"$sum": 1}}),
    )


def _severity_pipeline() -> Pipeline:
    """
    Total findings per severity level.

    ``huskyciresults`` is nested as tool -> language -> severity -> [findings].
    Each level is turned into k/v pairs and unwound; the group sums the
    length of each findings array rather than counting documents.
    """
    return (
        project({"huskyresults": {"$objectToArray": f"${RESULTS_FIELD}"}}),
        unwind("huskyresults"),
        project({"languageresults": {"$objectToArray": "$huskyresults.v"}}),
        unwind("languageresults"),
        project({"results": {"$objectToArray": "$languageresults.v"}}),
        unwind("results"),
        group({"_id": "$results.k", "count": {"$sum": {"$size": "$results.v"}}}),
        project({"severity": "$_id", "count": 1, "_id": 0}),
    )


def _time_to_fix_pipeline() -> Pipeline:
    """
    Passed/failed analysis history per repository branch.

    Only branches that have both outcomes recorded are kept, since a fix
    can only be measured between a failing and a passing analysis.
    """
    return (
        project(
            {
                "repositoryBranch": 1,
                "startedAt": 1,
                "finishedAt": 1,
                "result": 1,
                "repositoryURL": 1,
                RESULTS_FIELD: {
                    "$cond": {
                        "if": {"$eq": [EMPTY_RESULTS_SENTINEL, f"${RESULTS_FIELD}"]},
                        "then": "$$REMOVE",
                        "else": f"${RESULTS_FIELD}",
                    }
                },
            }
        ),
        match(
            {
                "result": {
                    "$in": [AnalysisResult.PASSED.value, AnalysisResult.FAILED.value]
                }
            }
        ),
        unwind("startedAt", preserve_null_and_empty_arrays=False),
        unwind("finishedAt", preserve_null_and_empty_arrays=False),
        unwind(RESULTS_FIELD, preserve_null_and_empty_arrays=False),
        group(
            {
                "_id": {
                    "repositoryURL": "$repositoryURL",
                    "repositoryBranch": "$repositoryBranch",
                    "result": "$result",
                },
                "data": {
                    "$push": {
                        "startedAt": "$startedAt",
                        "finishedAt": "$finishedAt",
                        RESULTS_FIELD: f"${RESULTS_FIELD}",
                    }
                },
                "count": {"$sum": 1},
            }
        ),
        group(
            {
                "_id": {
                    "repositoryURL": "$_id.repositoryURL",
                    "repositoryBranch": "$_id.repositoryBranch",
                },
                "analyses": {
                    "$push": {
                        "result": "$_id.result",
                        "count": "$count",
                        "data": "$data",
                    }
                },
                "total": {"$sum": "$count"},
            }
        ),
        # One entry per outcome: both passed and failed must be present
        match({"analyses": {"$size": 2}}),
        project(
            {
                "_id": 0,
                "repositoryURL": "$_id.repositoryURL",
                "repositoryBranch": "$_id.repositoryBranch",
                "analyses": 1,
                "totalAnalyses": "$total",
            }
        ),
    )


STATISTICS_CATALOG: Mapping[StatisticName, Pipeline] = MappingProxyType(
    {
        StatisticName.LANGUAGE: count_aggregation(
            "codes", "language", "codes.language"
        ),
        StatisticName.CONTAINER: count_aggregation(
            "containers", "container", "containers.securityTest.name"
        ),
        StatisticName.ANALYSIS: _analysis_pipeline(),
        StatisticName.REPOSITORY: _repository_pipeline(),
        StatisticName.AUTHOR: _author_pipeline(),
        StatisticName.SEVERITY: _severity_pipeline(),
        StatisticName.TIME_TO_FIX: _time_to_fix_pipeline(),
    }
)


def pipeline_for(name: Union[StatisticName, str]) -> Pipeline:
    """
    Look up the pipeline of a named statistic.

    Raises:
        UnknownStatisticError: If the name is not in the catalog
    """
    try:
        key = StatisticName(name)
    except ValueError:
        raise UnknownStatisticError(str(name)) from None
    return STATISTICS_CATALOG[key]
