"""Tests for main.py CLI functionality."""

import json
from unittest.mock import patch

import pytest

from image_renditions.core.factories import PipelineFactory
from image_renditions.main import main
from image_renditions.testing.fakes import FakeLogger, setup_test_s3_environment


def _pipeline_with(fake_s3):
    """Patch the factory so the CLI runs against the fake store."""
    original = PipelineFactory.create_pipeline

    def create(**kwargs):
        return original(s3_client=fake_s3, logger=FakeLogger(), config=kwargs["config"])

    return patch("image_renditions.main.PipelineFactory.create_pipeline", side_effect=create)


class TestMainCLI:
    """Tests for the main CLI functionality."""

    def test_main_with_no_args_shows_help(self):
        with patch("argparse.ArgumentParser.print_help") as mock_help:
            with pytest.raises(SystemExit) as exc_info:
                main([])
        mock_help.assert_called_once()
        assert exc_info.value.code == 1

    def test_main_version_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["version"])
        assert exc_info.value.code == 0
        assert "Version 0.1.0" in capsys.readouterr().out

    def test_sizes_command(self, capsys):
        main(["sizes"])

        out = capsys.readouterr().out
        assert "large_square" in out
        assert "120x120 crop" in out

    def test_plan_command(self, capsys):
        main(["plan", "--width", "1920", "--height", "1080"])

        out = capsys.readouterr().out
        assert "large            crop 1920x1080+0+0 -> 640x360" in out
        assert "large_square     crop 1080x1080+420+0 -> 640x640" in out

    def test_plan_rejects_non_positive(self):
        with pytest.raises(SystemExit):
            main(["plan", "--width", "0", "--height", "10"])

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"sizes": [{"name": "tiny", "max_width": 8, "max_height": 8}]}))

        main(["--config", str(path), "sizes"])

        assert capsys.readouterr().out.startswith("tiny")

    def test_invalid_config_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(tmp_path / "missing.json"), "sizes"])
        assert exc_info.value.code == 1

    def test_process_success(self, capsys):
        fake_s3 = setup_test_s3_environment()

        with _pipeline_with(fake_s3):
            main(["process", "--bucket", "test-bucket", "--key", "original/abc123/landscape.jpg"])

        out = capsys.readouterr().out
        assert out.count("succeeded") == 6
        assert fake_s3.get_bucket("test-bucket").get_object("medium/abc123/landscape.jpg")

    def test_process_encoded_key(self):
        fake_s3 = setup_test_s3_environment()
        fake_s3.get_bucket("test-bucket").add_object(
            "original/abc/my photo.jpg",
            fake_s3.get_bucket("test-bucket").get_object("original/abc123/landscape.jpg").body,
        )

        with _pipeline_with(fake_s3):
            main(
                [
                    "process",
                    "--bucket",
                    "test-bucket",
                    "--key",
                    "original/abc/my+photo.jpg",
                    "--encoded",
                ]
            )

        assert fake_s3.get_bucket("test-bucket").get_object("thumb/abc/my photo.jpg")

    def test_process_serial_failure_exits(self):
        fake_s3 = setup_test_s3_environment()

        with _pipeline_with(fake_s3) as mock_create:
            with pytest.raises(SystemExit) as exc_info:
                main(
                    [
                        "process",
                        "--bucket",
                        "test-bucket",
                        "--key",
                        "original/mno345/broken.jpg",
                        "--strategy",
                        "serial",
                        "--acl",
                        "private",
                    ]
                )

        assert exc_info.value.code == 1
        config = mock_create.call_args.kwargs["config"]
        assert config.strategy == "serial"
        assert config.acl == "private"
        assert fake_s3.count("get_object") == 1
