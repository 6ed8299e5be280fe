"""Tests for the dreamplan CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from dreamplan.cli import app
from dreamplan.config import get_config_path, get_user_id, load_config, save_config
from dreamplan.store.queries import get_all_dreams, get_family_profile
from dreamplan.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("COLUMNS", "200")
    return tmp_path


@pytest.fixture
def initialized() -> None:
    result = runner.invoke(app, ["init", "--name", "Aki"])
    assert result.exit_code == 0, result.output


@pytest.fixture
def family(initialized: None) -> None:
    result = runner.invoke(app, ["setup", "--start-fy", "2024"], input="Ken\n\n\n\n\nAki\n\n\n\n\nn\n")
    assert result.exit_code == 0, result.output
    result = runner.invoke(app, ["add-member", "Hana", "--year", "2015", "--month", "4"])
    assert result.exit_code == 0, result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self) -> None:
        """Should create both files and a user ID."""
        result = runner.invoke(app, ["init", "--name", "Aki"])

        assert result.exit_code == 0, result.output
        assert get_db_path().exists()
        assert get_user_id() is not None
        assert load_config(get_config_path())["display_name"] == "Aki"

    def test_refuses_to_overwrite(self, initialized: None) -> None:
        """Second init without --force fails."""
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force_resets_user(self, initialized: None) -> None:
        """--force creates a fresh config."""
        first = get_user_id()
        result = runner.invoke(app, ["init", "--force"])
        assert result.exit_code == 0, result.output
        assert get_user_id() != first


class TestSetup:
    """Tests for family setup and editing commands."""

    def test_setup_saves_profile(self, initialized: None) -> None:
        """Interactive setup stores the named parents."""
        result = runner.invoke(app, ["setup", "--start-fy", "2024"], input="Ken\n\n\n\n\nAki\n\n\n\n\nn\n")

        assert result.exit_code == 0, result.output
        profile = get_family_profile(get_db_path())
        assert profile is not None
        assert profile.start_fy == 2024
        assert [(m.name, m.birth_year, m.role) for m in profile.members] == [
            ("Ken", 1980, "parent"),
            ("Aki", 1978, "parent"),
        ]

    def test_setup_requires_init(self) -> None:
        """Setup without init tells the user to run init."""
        result = runner.invoke(app, ["setup", "--start-fy", "2024"])
        assert result.exit_code == 1
        assert "dreamplan init" in result.output

    def test_add_member_rejects_blank_name(self, family: None) -> None:
        """Blank names are rejected before saving."""
        result = runner.invoke(app, ["add-member", " ", "--year", "2018", "--month", "6"])
        assert result.exit_code == 1
        assert "Please enter names" in result.output

    def test_remove_member(self, family: None) -> None:
        """Removing a member by ID updates the profile."""
        profile = get_family_profile(get_db_path())
        assert profile is not None
        hana = profile.members[-1]

        result = runner.invoke(app, ["remove-member", hana.id])
        assert result.exit_code == 0, result.output

        profile = get_family_profile(get_db_path())
        assert profile is not None
        assert [m.name for m in profile.members] == ["Ken", "Aki"]

    def test_set_start(self, family: None) -> None:
        """Should change the start fiscal year."""
        result = runner.invoke(app, ["set-start", "2030"])
        assert result.exit_code == 0, result.output
        profile = get_family_profile(get_db_path())
        assert profile is not None
        assert profile.start_fy == 2030

    def test_bracketed_name_is_printed_literally(self, family: None) -> None:
        """Names that look like console markup are shown as typed."""
        result = runner.invoke(app, ["add-member", "[/x]", "--year", "2019", "--month", "5"])
        assert result.exit_code == 0, result.output
        assert "Added [/x]" in result.output

        result = runner.invoke(app, ["family"])
        assert result.exit_code == 0, result.output
        assert "[/x]" in result.output

        profile = get_family_profile(get_db_path())
        assert profile is not None
        result = runner.invoke(app, ["remove-member", profile.members[-1].id])
        assert result.exit_code == 0, result.output
        assert "Removed [/x]" in result.output


class TestTimeline:
    """Tests for the timeline command."""

    def test_without_profile_routes_to_setup(self, initialized: None) -> None:
        """No profile means the user is sent to setup."""
        result = runner.invoke(app, ["timeline"])
        assert result.exit_code == 1
        assert "dreamplan setup" in result.output

    def test_renders(self, family: None) -> None:
        """Timeline shows fiscal years and grades."""
        result = runner.invoke(app, ["timeline", "--years", "3"])
        assert result.exit_code == 0, result.output
        assert "FY2024" in result.output
        assert "FY2026" in result.output
        assert "FY2027" not in result.output
        assert "elementary 3" in result.output

    def test_footer_shows_display_name(self, family: None) -> None:
        """The footer names the user set at init."""
        result = runner.invoke(app, ["timeline", "--years", "1"])
        assert result.exit_code == 0, result.output
        assert "DASHBOARD | Aki" in result.output

    def test_footer_falls_back_to_user_id(self, family: None) -> None:
        """Without a display name the footer shows the user ID prefix."""
        config_path = get_config_path()
        config = load_config(config_path)
        config["display_name"] = ""
        save_config(config, config_path)

        result = runner.invoke(app, ["timeline", "--years", "1"])
        assert result.exit_code == 0, result.output
        assert f"DASHBOARD | {config['user_id'][:8]}" in result.output

    @pytest.mark.parametrize("years", ["0", "-1"])
    def test_rejects_non_positive_years(self, family: None, years: str) -> None:
        """--years must cover at least one fiscal year."""
        result = runner.invoke(app, ["timeline", "--years", years])
        assert result.exit_code == 1
        assert "--years must be at least 1" in result.output


class TestDreams:
    """Tests for add, edit, delete and list."""

    def test_add_with_fy_and_month(self, family: None) -> None:
        """Should store the event for the given fiscal year."""
        result = runner.invoke(app, ["add", "Hokkaido trip", "--fy", "2025", "--month", "8", "-c", "travel"])
        assert result.exit_code == 0, result.output

        dreams = get_all_dreams(get_db_path())
        assert [(d.fy, d.month, d.category, d.title) for d in dreams] == [(2025, 8, "travel", "Hokkaido trip")]
        assert dreams[0].user_id == get_user_id()

    def test_add_with_date_uses_fiscal_year(self, family: None) -> None:
        """A February date belongs to the previous fiscal year."""
        result = runner.invoke(app, ["add", "Ski trip", "--date", "2026-02-10"])
        assert result.exit_code == 0, result.output

        dream = get_all_dreams(get_db_path())[0]
        assert (dream.fy, dream.month) == (2025, 2)

    def test_add_with_day_first_date(self, family: None) -> None:
        """Non-ISO dates are read day first."""
        result = runner.invoke(app, ["add", "Ski trip", "--date", "10/02/2026"])
        assert result.exit_code == 0, result.output

        dream = get_all_dreams(get_db_path())[0]
        assert (dream.fy, dream.month) == (2025, 2)

    def test_add_rejects_missing_date(self, family: None) -> None:
        """A date that parses to nothing is an error, not a stored row."""
        result = runner.invoke(app, ["add", "Trip", "--date", "NaT"])
        assert result.exit_code == 1
        assert "Could not parse date" in result.output
        assert get_all_dreams(get_db_path()) == []

    def test_add_requires_title(self, family: None) -> None:
        """Blank titles are rejected."""
        result = runner.invoke(app, ["add", "  ", "--fy", "2025", "--month", "8"])
        assert result.exit_code == 1
        assert get_all_dreams(get_db_path()) == []

    def test_add_requires_when(self, family: None) -> None:
        """Either --fy/--month or --date is needed."""
        result = runner.invoke(app, ["add", "Trip"])
        assert result.exit_code == 1

    def test_add_rejects_unknown_category(self, family: None) -> None:
        """Category must be in the fixed set."""
        result = runner.invoke(app, ["add", "Trip", "--fy", "2025", "--month", "8", "-c", "hobby"])
        assert result.exit_code == 1

    def test_edit_replaces_fields(self, family: None) -> None:
        """Edit keeps unspecified fields and replaces the rest."""
        runner.invoke(app, ["add", "Trip", "--fy", "2025", "--month", "8", "-c", "travel"])
        dream_id = get_all_dreams(get_db_path())[0].id

        result = runner.invoke(app, ["edit", str(dream_id), "--title", "Okinawa trip", "--month", "12"])
        assert result.exit_code == 0, result.output

        dream = get_all_dreams(get_db_path())[0]
        assert (dream.fy, dream.month, dream.category, dream.title) == (2025, 12, "travel", "Okinawa trip")
        assert dream.updated_at is not None

    def test_edit_missing(self, family: None) -> None:
        """Unknown IDs fail."""
        result = runner.invoke(app, ["edit", "42", "--title", "x"])
        assert result.exit_code == 1

    def test_delete(self, family: None) -> None:
        """Should delete by ID, failing for unknown IDs."""
        runner.invoke(app, ["add", "Trip", "--fy", "2025", "--month", "8"])
        dream_id = get_all_dreams(get_db_path())[0].id

        assert runner.invoke(app, ["delete", str(dream_id)]).exit_code == 0
        assert runner.invoke(app, ["delete", str(dream_id)]).exit_code == 1

    def test_list(self, family: None) -> None:
        """List shows stored dreams."""
        runner.invoke(app, ["add", "Trip", "--fy", "2025", "--month", "8"])
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0, result.output
        assert "Trip" in result.output


class TestGenerate:
    """Tests for the generate command."""

    def test_generates_in_window_events(self, family: None) -> None:
        """Only events inside the 20-year window are saved."""
        result = runner.invoke(app, ["generate"])
        assert result.exit_code == 0, result.output

        dreams = get_all_dreams(get_db_path())
        assert dreams
        assert all(2024 <= d.fy < 2044 for d in dreams)
        titles = [d.title for d in dreams]
        # Hana entered elementary school in FY2022, before the window
        assert "Hana: elementary school entrance" not in titles
        assert "Hana: junior high school entrance" in titles
        # Ken (1980-01) reaches kanreki in FY2039
        assert "Ken: kanreki (60th year)" in titles

    def test_dry_run_saves_nothing(self, family: None) -> None:
        """--dry-run only prints."""
        result = runner.invoke(app, ["generate", "--dry-run"])
        assert result.exit_code == 0, result.output
        assert get_all_dreams(get_db_path()) == []

    def test_generating_twice_duplicates(self, family: None) -> None:
        """Running generate twice stores every event twice."""
        runner.invoke(app, ["generate"])
        first = len(get_all_dreams(get_db_path()))
        runner.invoke(app, ["generate"])

        dreams = get_all_dreams(get_db_path())
        assert len(dreams) == 2 * first
        assert sum(1 for d in dreams if d.title == "Hana: junior high school entrance") == 2
