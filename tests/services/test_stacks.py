import pytest

from best_ball_rosters.domain.adp import MISSING_ADP
from best_ball_rosters.domain.filters import AnalysisSortField, CountRange, SortDirection
from best_ball_rosters.domain.roster import EnrichedRoster
from best_ball_rosters.domain.stack import StackAnalysis
from best_ball_rosters.services.stacks import (
    analyze_stacks,
    available_stack_sizes,
    available_teams,
    filter_and_sort_stacks,
)
from tests.helpers import make_enriched, make_enriched_roster

MAHOMES = make_enriched(1, "Patrick", "Mahomes", position="QB", team="KC", adp=45.0)
KELCE = make_enriched(2, "Travis", "Kelce", position="TE", team="KC", adp=30.0)
RICE = make_enriched(3, "Rashee", "Rice", position="WR", team="KC", adp=60.0)
ALLEN = make_enriched(4, "Josh", "Allen", position="QB", team="BUF", adp=25.0)
COOK = make_enriched(5, "James", "Cook", position="RB", team="BUF")
CHASE = make_enriched(6, "Ja'Marr", "Chase", position="WR", team="CIN", adp=1.5)


class TestAnalyzeStacks:
    def test_three_player_group_yields_four_stacks(self) -> None:
        analysis = analyze_stacks([make_enriched_roster(1, [MAHOMES, KELCE, RICE, CHASE])], min_size=2, max_size=3)
        keys = {s.key for s in analysis.stacks}
        assert keys == {
            "KC:Patrick Mahomes,Travis Kelce",
            "KC:Patrick Mahomes,Rashee Rice",
            "KC:Rashee Rice,Travis Kelce",
            "KC:Patrick Mahomes,Rashee Rice,Travis Kelce",
        }
        assert all(s.frequency == 1 for s in analysis.stacks)
        assert analysis.total_rosters == 1

    def test_max_size_caps_enumeration(self) -> None:
        analysis = analyze_stacks([make_enriched_roster(1, [MAHOMES, KELCE, RICE])], min_size=2, max_size=2)
        assert {s.size for s in analysis.stacks} == {2}
        assert len(analysis.stacks) == 3

    def test_min_size_excludes_small_groups(self) -> None:
        analysis = analyze_stacks([make_enriched_roster(1, [MAHOMES, KELCE, ALLEN, COOK])], min_size=3)
        assert analysis.stacks == ()

    def test_frequency_accumulates_across_rosters(self) -> None:
        rosters = [
            make_enriched_roster(1, [MAHOMES, KELCE]),
            make_enriched_roster(2, [KELCE, MAHOMES, ALLEN]),
            make_enriched_roster(3, [ALLEN, COOK]),
            make_enriched_roster(4, [CHASE]),
        ]
        analysis = analyze_stacks(rosters)
        by_key = {s.key: s for s in analysis.stacks}
        kc = by_key["KC:Patrick Mahomes,Travis Kelce"]
        assert kc.frequency == 2
        assert kc.percentage == pytest.approx(50.0)
        assert kc.team == "KC"
        assert kc.player_names == ("Patrick Mahomes", "Travis Kelce")
        assert by_key["BUF:James Cook,Josh Allen"].frequency == 1

    def test_percentage_matches_frequency(self) -> None:
        rosters = [make_enriched_roster(i, [MAHOMES, KELCE, RICE]) for i in range(3)]
        rosters.append(make_enriched_roster(9, [ALLEN, COOK]))
        analysis = analyze_stacks(rosters)
        for stack in analysis.stacks:
            assert 0 <= stack.percentage <= 100
            assert stack.percentage == pytest.approx(stack.frequency / analysis.total_rosters * 100)

    def test_groups_by_actual_team(self) -> None:
        traded = make_enriched(7, "Hollywood", "Brown", team="BAL", actual_team="KC", adp=80.0)
        analysis = analyze_stacks([make_enriched_roster(1, [MAHOMES, traded])])
        assert [s.key for s in analysis.stacks] == ["KC:Hollywood Brown,Patrick Mahomes"]

    def test_average_adp_ignores_missing(self) -> None:
        by_key = {s.key: s for s in analyze_stacks([make_enriched_roster(1, [ALLEN, COOK])]).stacks}
        assert by_key["BUF:James Cook,Josh Allen"].average_adp == 25.0

    def test_average_adp_sentinel(self) -> None:
        nobody = make_enriched(8, "No", "Adp", team="BUF")
        by_key = {s.key: s for s in analyze_stacks([make_enriched_roster(1, [COOK, nobody])]).stacks}
        assert by_key["BUF:James Cook,No Adp"].average_adp == MISSING_ADP

    def test_empty_pool(self) -> None:
        analysis = analyze_stacks([])
        assert analysis.stacks == ()
        assert analysis.total_rosters == 0

    def test_rejects_min_size_below_two(self) -> None:
        with pytest.raises(ValueError, match="at least 2"):
            analyze_stacks([], min_size=1)

    def test_rejects_inverted_sizes(self) -> None:
        with pytest.raises(ValueError, match="smaller than"):
            analyze_stacks([], min_size=3, max_size=2)


class TestStackQueries:
    @pytest.fixture
    def rosters(self) -> list[EnrichedRoster]:
        return [
            make_enriched_roster(1, [MAHOMES, KELCE, RICE]),
            make_enriched_roster(2, [MAHOMES, KELCE]),
            make_enriched_roster(3, [ALLEN, COOK]),
        ]

    def test_available_sizes_and_teams(self, rosters: list[EnrichedRoster]) -> None:
        analysis = analyze_stacks(rosters)
        assert available_stack_sizes(analysis) == [2, 3]
        assert available_teams(analysis) == ["BUF", "KC"]

    def test_default_sort_is_frequency_descending(self, rosters: list[EnrichedRoster]) -> None:
        result = filter_and_sort_stacks(analyze_stacks(rosters))
        assert result[0].key == "KC:Patrick Mahomes,Travis Kelce"
        frequencies = [s.frequency for s in result]
        assert frequencies == sorted(frequencies, reverse=True)

    def test_size_filter(self, rosters: list[EnrichedRoster]) -> None:
        result = filter_and_sort_stacks(analyze_stacks(rosters), size_range=CountRange(min=3, max=3))
        assert [s.size for s in result] == [3]

    def test_team_filter(self, rosters: list[EnrichedRoster]) -> None:
        result = filter_and_sort_stacks(analyze_stacks(rosters), teams=["BUF"])
        assert [s.key for s in result] == ["BUF:James Cook,Josh Allen"]

    def test_sort_by_average_adp_ascending(self, rosters: list[EnrichedRoster]) -> None:
        result = filter_and_sort_stacks(
            analyze_stacks(rosters), sort_field=AnalysisSortField.AVERAGE_ADP, direction=SortDirection.ASC
        )
        adps = [s.average_adp for s in result]
        assert adps == sorted(adps)

    def test_filtering_is_idempotent(self, rosters: list[EnrichedRoster]) -> None:
        analysis = analyze_stacks(rosters)
        once = filter_and_sort_stacks(analysis, size_range=CountRange(min=2, max=2), teams=["KC"])
        again = filter_and_sort_stacks(
            StackAnalysis(stacks=tuple(once), total_rosters=analysis.total_rosters),
            size_range=CountRange(min=2, max=2),
            teams=["KC"],
        )
        assert again == once
