import pytest

from best_ball_rosters.data.protocol import DataSourceError
from best_ball_rosters.domain.adp import ADPEntry
from best_ball_rosters.domain.draftable import DraftablePlayer
from best_ball_rosters.repos.side_tables import SideTableRepository
from tests.fakes.sources import FailingSource, StaticSource
from tests.helpers import make_adp_entry, make_draftable

_ADP = [
    make_adp_entry("Ja'Marr Chase", 1.4, position="WR", team="CIN"),
    make_adp_entry("Bijan Robinson", 2.8, position="RB", team="ATL"),
    make_adp_entry("Marvin Harrison Jr.", 18.0, position="WR", team="ARI"),
    make_adp_entry("Travis Kelce", 40.2, position="TE", team="KC"),
    make_adp_entry("Breece Hall", 8.6, position="RB", team="NYJ"),
]


def _repo(adp: list[ADPEntry] | None = None, draftables: list[DraftablePlayer] | None = None) -> SideTableRepository:
    return SideTableRepository(StaticSource(_ADP if adp is None else adp), StaticSource(draftables or []))


class TestLoading:
    def test_load_all_populates_both_tables(self) -> None:
        repo = _repo(draftables=[make_draftable(1)])
        adp, draftables = repo.load_all()
        assert len(adp) == 5
        assert len(draftables) == 1
        assert repo.is_loaded

    def test_second_load_uses_cache(self) -> None:
        adp_source = StaticSource(_ADP)
        draftables_source = StaticSource([])
        repo = SideTableRepository(adp_source, draftables_source)
        repo.load_all()
        repo.load_all()
        repo.load_adp()
        assert adp_source.calls == 1
        assert draftables_source.calls == 1

    def test_clear_cache_forces_reload(self) -> None:
        adp_source = StaticSource(_ADP)
        repo = SideTableRepository(adp_source, StaticSource([]))
        repo.load_all()
        repo.clear_cache()
        assert not repo.is_loaded
        assert repo.match_adp("Travis", "Kelce") is None
        repo.load_all()
        assert adp_source.calls == 2

    def test_failure_raises_data_source_error(self) -> None:
        repo = SideTableRepository(FailingSource("adp down"), StaticSource([]))
        with pytest.raises(DataSourceError, match="adp down"):
            repo.load_all()
        assert not repo.is_loaded

    def test_failed_load_can_be_retried_by_caller(self) -> None:
        adp_source = FailingSource()
        repo = SideTableRepository(adp_source, StaticSource([]))
        with pytest.raises(DataSourceError):
            repo.load_adp()
        with pytest.raises(DataSourceError):
            repo.load_adp()
        assert adp_source.calls == 2


class TestMatchADP:
    def test_exact_name(self) -> None:
        repo = _repo()
        repo.load_adp()
        entry = repo.match_adp("Travis", "Kelce")
        assert entry is not None
        assert entry.adp == 40.2

    def test_suffix_and_punctuation_stripped(self) -> None:
        repo = _repo()
        repo.load_adp()
        assert repo.match_adp("Marvin", "Harrison") is not None
        assert repo.match_adp("JaMarr", "Chase") is not None

    def test_case_insensitive(self) -> None:
        repo = _repo()
        repo.load_adp()
        assert repo.match_adp("BIJAN", "ROBINSON") is not None

    def test_no_fuzzy_match(self) -> None:
        repo = _repo()
        repo.load_adp()
        assert repo.match_adp("Travis", "Kelsey") is None

    def test_none_before_load(self) -> None:
        assert _repo().match_adp("Travis", "Kelce") is None


class TestMatchDraftable:
    def test_exact_id(self) -> None:
        repo = _repo(draftables=[make_draftable(10, position="TE", bye_week="6")])
        repo.load_draftables()
        draftable = repo.match_draftable(10)
        assert draftable is not None
        assert draftable.position == "TE"
        assert repo.bye_week(10) == "6"

    def test_first_record_per_id_wins(self) -> None:
        repo = _repo(draftables=[make_draftable(10, position="TE"), make_draftable(10, position="WR")])
        repo.load_draftables()
        draftable = repo.match_draftable(10)
        assert draftable is not None
        assert draftable.position == "TE"

    def test_unknown_id(self) -> None:
        repo = _repo(draftables=[make_draftable(10)])
        repo.load_draftables()
        assert repo.match_draftable(11) is None
        assert repo.bye_week(11) is None

    def test_positions(self) -> None:
        repo = _repo(draftables=[make_draftable(1, position="WR"), make_draftable(2, position="QB")])
        repo.load_draftables()
        assert repo.draftable_positions() == ["QB", "WR"]
        assert [d.player_id for d in repo.draftables_by_position("QB")] == [2]


class TestADPQueries:
    @pytest.fixture
    def repo(self) -> SideTableRepository:
        repo = _repo()
        repo.load_adp()
        return repo

    def test_positions(self, repo: SideTableRepository) -> None:
        assert repo.adp_positions() == ["RB", "TE", "WR"]

    def test_top_by_position(self, repo: SideTableRepository) -> None:
        assert [e.name for e in repo.top_adp_by_position("RB", 1)] == ["Bijan Robinson"]
        assert [e.name for e in repo.top_adp_by_position("WR")] == ["Ja'Marr Chase", "Marvin Harrison Jr."]

    def test_ranks(self, repo: SideTableRepository) -> None:
        assert repo.adp_overall_rank("breece-hall") == 3
        assert repo.adp_position_rank("breece-hall") == 2
        assert repo.adp_overall_rank("nobody") is None

    def test_search_by_name_or_team(self, repo: SideTableRepository) -> None:
        assert [e.name for e in repo.search_adp("ROB")] == ["Bijan Robinson"]
        assert [e.name for e in repo.search_adp("kc")] == ["Travis Kelce"]

    def test_summary(self, repo: SideTableRepository) -> None:
        summary = repo.adp_summary()
        assert summary is not None
        assert summary.total_players == 5
        assert summary.average_adp == 14.2
        rb = next(p for p in summary.positions if p.position == "RB")
        assert rb.count == 2
        assert rb.average_adp == 5.7
        assert rb.top_player.name == "Bijan Robinson"

    def test_summary_empty(self) -> None:
        repo = _repo(adp=[])
        repo.load_adp()
        assert repo.adp_summary() is None
