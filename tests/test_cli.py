"""Tests for the command line interface."""

import json

from click.testing import CliRunner

from swagger_modifier.cli import main


class TestMain:
    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "v1.0.0" in result.output

    def test_missing_paths(self):
        result = CliRunner().invoke(main, ["-i", "swagger.json"])

        assert result.exit_code == 1
        assert "Input file path and output file path required" in result.output

    def test_full_run(self, write_json, search_doc, tmp_path):
        source = write_json("swagger.json", search_doc)
        mapping = write_json("mapping.json", {"prefix": "FOS", "/search": {"get": {"suffix": "V2"}}})
        output = tmp_path / "out" / "swagger.json"
        config_output = tmp_path / "out" / "openapi-config.json"

        result = CliRunner().invoke(
            main,
            ["-i", str(source), "-o", str(output), "-c", str(mapping), "-oc", str(config_output)],
        )

        assert result.exit_code == 0, result.output
        written = json.loads(output.read_text(encoding="utf-8"))
        assert set(written["definitions"]) == {"FOSCriteriaV2", "FOSSearchResultV2", "FOSHitV2"}
        config = json.loads(config_output.read_text(encoding="utf-8"))
        assert config["additionalProperties"]["customNames"]["foscriteriav2"] == "FOSCriteriaV2"

    def test_bad_config_writes_nothing(self, write_json, search_doc, tmp_path):
        source = write_json("swagger.json", search_doc)
        mapping = tmp_path / "mapping.json"
        mapping.write_text("[1, 2]", encoding="utf-8")
        output = tmp_path / "out.json"

        result = CliRunner().invoke(main, ["-i", str(source), "-o", str(output), "-c", str(mapping)])

        assert result.exit_code == 1
        assert not output.exists()

    def test_missing_input_file(self, tmp_path):
        output = tmp_path / "out.json"

        result = CliRunner().invoke(main, ["-i", str(tmp_path / "missing.json"), "-o", str(output)])

        assert result.exit_code == 1
        assert not output.exists()

    def test_strict_flag(self, write_json, tmp_path):
        doc = {
            "swagger": "2.0",
            "paths": {"/x": {"get": {"responses": {"200": {"description": "OK", "schema": {"$ref": "#/definitions/Gone"}}}}}},
            "definitions": {},
        }
        source = write_json("swagger.json", doc)
        output = tmp_path / "out.json"

        lenient = CliRunner().invoke(main, ["-i", str(source), "-o", str(output)])
        strict = CliRunner().invoke(main, ["-i", str(source), "-o", str(tmp_path / "strict.json"), "--strict"])

        assert lenient.exit_code == 0
        assert output.exists()
        assert strict.exit_code == 1
        assert not (tmp_path / "strict.json").exists()
