"""Unit tests for the statistics pipeline catalog."""

import pytest

from scanstats.entities.enums import StageOperator, StatisticName
from scanstats.pipeline.catalog import STATISTICS_CATALOG, pipeline_for
from scanstats.pipeline.stages import to_mongo_pipeline
from scanstats.services.exceptions import UnknownStatisticError


def _operators(pipeline):
    return [stage.operator for stage in pipeline]


class TestCatalogLookup:
    def test_catalog_has_all_statistics(self):
        assert set(STATISTICS_CATALOG) == set(StatisticName)
        assert len(STATISTICS_CATALOG) == 7

    @pytest.mark.parametrize("name", [s.value for s in StatisticName])
    def test_lookup_by_string(self, name):
        assert pipeline_for(name) is STATISTICS_CATALOG[StatisticName(name)]

    def test_lookup_by_enum(self):
        assert pipeline_for(StatisticName.SEVERITY) == STATISTICS_CATALOG[StatisticName.SEVERITY]

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownStatisticError) as exc_info:
            pipeline_for("vulnerability")

        assert exc_info.value.name == "vulnerability"

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            STATISTICS_CATALOG[StatisticName.ANALYSIS] = ()

    def test_rendering_does_not_alter_catalog(self):
        rendered = to_mongo_pipeline(pipeline_for("analysis"))
        rendered[0]["$project"]["injected"] = 1

        assert to_mongo_pipeline(pipeline_for("analysis"))[0] == {
            "$project": {"finishedAt": 1, "result": 1}
        }


class TestCountPipelines:
    def test_language(self):
        assert to_mongo_pipeline(pipeline_for("language")) == [
            {"$project": {"codes": 1}},
            {"$unwind": "$codes"},
            {"$group": {"_id": "$codes.language", "count": {"$sum": 1}}},
            {"$project": {"language": "$_id", "count": 1, "_id": 0}},
        ]

    def test_container(self):
        rendered = to_mongo_pipeline(pipeline_for("container"))

        assert rendered[1] == {"$unwind": "$containers"}
        assert rendered[2]["$group"]["_id"] == "$containers.securityTest.name"
        assert rendered[3]["$project"] == {"container": "$_id", "count": 1, "_id": 0}


class TestAnalysisPipeline:
    def test_groups_by_result_without_unwind(self):
        pipeline = pipeline_for("analysis")

        assert StageOperator.UNWIND not in _operators(pipeline)
        assert to_mongo_pipeline(pipeline) == [
            {"$project": {"finishedAt": 1, "result": 1}},
            {"$group": {"_id": "$result", "count": {"$sum": 1}}},
            {"$project": {"count": 1, "result": "$_id", "_id": 0}},
        ]


class TestRepositoryPipeline:
    def test_filters_before_grouping(self):
        rendered = to_mongo_pipeline(pipeline_for("repository"))

        assert rendered[0] == {"$match": {"repositoryURL": {"$exists": True}}}
        assert rendered[1] == {"$match": {"repositoryBranch": {"$exists": True}}}

    def test_deduplicates_branches_then_counts(self):
        rendered = to_mongo_pipeline(pipeline_for("repository"))

        assert rendered[2]["$group"]["_id"] == {
            "repositoryBranch": "$repositoryBranch",
            "repositoryURL": "$repositoryURL",
        }
        assert rendered[3]["$group"] == {
            "_id": {"repositoryURL": "$_id.repositoryURL"},
            "branches": {"$sum": 1},
        }
        assert rendered[4]["$group"] == {
            "_id": "repositories",
            "totalBranches": {"$sum": "$branches"},
            "totalRepositories": {"$sum": 1},
        }

    def test_strips_internal_id(self):
        assert to_mongo_pipeline(pipeline_for("repository"))[-1] == {"$project": {"_id": 0}}


class TestAuthorPipeline:
    def test_counts_distinct_authors(self):
        assert to_mongo_pipeline(pipeline_for("author")) == [
            {"$project": {"commitAuthors": 1}},
            {"$unwind": "$commitAuthors"},
            {"$group": {"_id": "$commitAuthors"}},
            {"$group": {"_id": "commitAuthors", "totalAuthors": {"$sum": 1}}},
        ]


class TestSeverityPipeline:
    def test_flattens_three_levels(self):
        pipeline = pipeline_for("severity")
        rendered = to_mongo_pipeline(pipeline)

        assert _operators(pipeline)[:6] == [
            StageOperator.PROJECT,
            StageOperator.UNWIND,
        ] * 3
        assert rendered[0]["$project"] == {
            "huskyresults": {"$objectToArray": "$huskyciresults"}
        }
        assert rendered[2]["$project"] == {
            "languageresults": {"$objectToArray": "$huskyresults.v"}
        }
        assert rendered[4]["$project"] == {
            "results": {"$objectToArray": "$languageresults.v"}
        }

    def test_sums_findings_array_length(self):
        rendered = to_mongo_pipeline(pipeline_for("severity"))

        assert rendered[6] == {
            "$group": {"_id": "$results.k", "count": {"$sum": {"$size": "$results.v"}}}
        }
        assert rendered[7] == {"$project": {"severity": "$_id", "count": 1, "_id": 0}}


class TestTimeToFixPipeline:
    def test_drops_empty_results_sentinel(self):
        project_stage = to_mongo_pipeline(pipeline_for("time-to-fix"))[0]["$project"]

        assert project_stage["huskyciresults"] == {
            "$cond": {
                "if": {"$eq": ["{}", "$huskyciresults"]},
                "then": "$$REMOVE",
                "else": "$huskyciresults",
            }
        }

    def test_matches_passed_and_failed_only(self):
        rendered = to_mongo_pipeline(pipeline_for("time-to-fix"))

        assert rendered[1] == {"$match": {"result": {"$in": ["passed", "failed"]}}}

    def test_unwinds_drop_missing_fields(self):
        rendered = to_mongo_pipeline(pipeline_for("time-to-fix"))

        assert [doc["$unwind"] for doc in rendered[2:5]] == [
            {"path": "$startedAt", "preserveNullAndEmptyArrays": False},
            {"path": "$finishedAt", "preserveNullAndEmptyArrays": False},
            {"path": "$huskyciresults", "preserveNullAndEmptyArrays": False},
        ]

    def test_groups_per_result_then_per_branch(self):
        rendered = to_mongo_pipeline(pipeline_for("time-to-fix"))
        per_result, per_branch = rendered[5]["$group"], rendered[6]["$group"]

        assert per_result["_id"] == {
            "repositoryURL": "$repositoryURL",
            "repositoryBranch": "$repositoryBranch",
            "result": "$result",
        }
        assert per_result["data"]["$push"] == {
            "startedAt": "$startedAt",
            "finishedAt": "$finishedAt",
            "huskyciresults": "$huskyciresults",
        }
        assert per_branch["analyses"]["$push"] == {
            "result": "$_id.result",
            "count": "$count",
            "data": "$data",
        }
        assert per_branch["total"] == {"$sum": "$count"}

    def test_keeps_branches_with_both_outcomes(self):
        rendered = to_mongo_pipeline(pipeline_for("time-to-fix"))

        assert rendered[7] == {"$match": {"analyses": {"$size": 2}}}

    def test_total_analyses_is_populated(self):
        final = to_mongo_pipeline(pipeline_for("time-to-fix"))[-1]["$project"]

        assert final == {
            "_id": 0,
            "repositoryURL": "$_id.repositoryURL",
            "repositoryBranch": "$_id.repositoryBranch",
            "analyses": 1,
            "totalAnalyses": "$total",
        }
