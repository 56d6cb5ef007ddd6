"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from io import StringIO
from unittest.mock import patch

import pytest

from species_resolver.cli import (
    cmd_classify,
    cmd_info,
    cmd_resolve,
    cmd_select,
    cmd_survey,
    create_parser,
    main,
)
from species_resolver.schemas import CandidateSummary, SelectedSpecies


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "species-resolver"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        parser = create_parser()
        args = parser.parse_args(["--debug", "info"])
        assert args.debug is True

    def test_select_command(self) -> None:
        """Select takes a location and optional class hint."""
        parser = create_parser()
        args = parser.parse_args(["select", "34.05", "-117.27", "--class", "bird"])
        assert args.command == "select"
        assert args.lat == 34.05
        assert args.lon == -117.27
        assert args.class_hint == "bird"

    def test_select_default_class(self) -> None:
        parser = create_parser()
        args = parser.parse_args(["select", "0", "0"])
        assert args.class_hint is None

    def test_resolve_command(self) -> None:
        parser = create_parser()
        args = parser.parse_args(["resolve", "45.5", "-122.6", "--class", "fish", "--count", "8"])
        assert args.class_name == "fish"
        assert args.count == 8

    def test_resolve_rejects_unknown_class(self) -> None:
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["resolve", "45.5", "-122.6", "--class", "insects"])

    def test_survey_and_classify_commands(self) -> None:
        parser = create_parser()
        assert parser.parse_args(["survey", "1", "2"]).command == "survey"
        assert parser.parse_args(["classify", "1", "2"]).command == "classify"


class TestCmdSelect:
    """Tests for cmd_select function."""

    def test_prints_selection(self) -> None:
        args = argparse.Namespace(lat=34.05, lon=-117.27, class_hint="birds")

        with patch("species_resolver.cli.SpeciesService") as mock_service:
            mock_service.return_value.select_species.return_value = SelectedSpecies(
                name="House Finch", scientific_name="Haemorhous mexicanus", type="bird"
            )
            with patch("sys.stdout", new=StringIO()) as mock_stdout:
                exit_code = cmd_select(args)
                output = json.loads(mock_stdout.getvalue())

        assert exit_code == 0
        assert output["name"] == "House Finch"
        mock_service.return_value.select_species.assert_called_once_with(34.05, -117.27, "birds")


class TestCmdResolve:
    """Tests for cmd_resolve function."""

    def test_lists_candidates(self) -> None:
        args = argparse.Namespace(lat=40.7, lon=-74.0, class_name="birds", count=None)
        candidate = CandidateSummary(
            name="Blue Jay",
            scientific_name="Cyanocitta cristata",
            type="bird",
            habitat="woodland",
            source="regional-eastern_forests",
        )

        with patch("species_resolver.cli.SpeciesService") as mock_service:
            mock_service.return_value.resolve.return_value = [candidate]
            mock_service.return_value.last_upstream_error = None
            with patch("sys.stdout", new=StringIO()) as mock_stdout:
                exit_code = cmd_resolve(args)
                output = mock_stdout.getvalue()

        assert exit_code == 0
        assert "Blue Jay (Cyanocitta cristata) [regional-eastern_forests]" in output


class TestCmdSurvey:
    """Tests for cmd_survey function."""

    def test_returns_zero(self) -> None:
        args = argparse.Namespace(lat=0.0, lon=-160.0, count=None)

        with patch("species_resolver.cli.SpeciesService") as mock_service:
            mock_service.return_value.survey.return_value.model_dump_json.return_value = "{}"
            with patch("sys.stdout", new=StringIO()):
                assert cmd_survey(args) == 0
            mock_service.return_value.survey.assert_called_once_with(0.0, -160.0, None)


class TestCmdClassify:
    """Tests for cmd_classify function."""

    def test_prints_ecoregion(self) -> None:
        args = argparse.Namespace(lat=34.045225, lon=-117.267289)

        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            exit_code = cmd_classify(args)
            output = json.loads(mock_stdout.getvalue())

        assert exit_code == 0
        assert output["name"] == "Southern California Mountains"
        assert output["region"] == "california"

    def test_unknown_region_is_null(self) -> None:
        args = argparse.Namespace(lat=0.0, lon=-160.0)

        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_classify(args)
            output = json.loads(mock_stdout.getvalue())

        assert output["code"] == "00"
        assert output["region"] is None


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_returns_zero(self) -> None:
        """Info command returns exit code 0."""
        assert cmd_info(argparse.Namespace()) == 0

    def test_prints_app_info(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_info(argparse.Namespace())
            output = mock_stdout.getvalue()
        assert "Application" in output
        assert "No-repeat window" in output


class TestMain:
    """Tests for main entry point."""

    def test_no_command_prints_help(self) -> None:
        with (
            patch("sys.argv", ["species-resolver"]),
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            assert main() == 0
            assert "usage" in mock_stdout.getvalue()

    def test_dispatches_command(self) -> None:
        with (
            patch("sys.argv", ["species-resolver", "classify", "0", "-160"]),
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            assert main() == 0
            assert "Unknown" in mock_stdout.getvalue()
