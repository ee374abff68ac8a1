"""Tests for YAML schema loading and consolidation."""

import textwrap
from pathlib import Path

import pytest
import yaml

from model_builder.errors import SchemaNotFoundError
from model_builder.schema.loader import YamlSchemaLoader, prepare_schema_file


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """Create a project schema directory with two files."""
    directory = tmp_path / "config" / "doctrine"
    directory.mkdir(parents=True)
    (directory / "b_schema.yml").write_text(
        textwrap.dedent(
            """\
            Employee:
              columns:
                first_name: string(100)
            Address:
            """
        )
    )
    (directory / "a_schema.yml").write_text(
        textwrap.dedent(
            """\
            Location:
              tableName: ohrm_location
            """
        )
    )
    return directory


class TestYamlSchemaLoader:
    """Tests for YamlSchemaLoader.load."""

    def test_load_directory_in_file_order(self, schema_dir: Path) -> None:
        models = YamlSchemaLoader().load(str(schema_dir))
        assert list(models) == ["Location", "Employee", "Address"]
        assert models["Address"] == {}
        assert models["Employee"]["columns"]["first_name"] == "string(100)"

    def test_load_single_file(self, schema_dir: Path) -> None:
        models = YamlSchemaLoader().load(str(schema_dir / "a_schema.yml"))
        assert models == {"Location": {"tableName": "ohrm_location"}}

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaNotFoundError):
            YamlSchemaLoader().load(str(tmp_path / "nope.yml"))

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.yml"
        path.write_text("- Employee\n- Address\n")
        with pytest.raises(SchemaNotFoundError, match="not a mapping"):
            YamlSchemaLoader().load(str(path))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.yml"
        path.write_text("Employee: [unclosed\n")
        with pytest.raises(SchemaNotFoundError, match="invalid YAML"):
            YamlSchemaLoader().load(str(path))

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.yml"
        path.write_text("")
        assert YamlSchemaLoader().load(str(path)) == {}

    def test_globals_become_model_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.yml"
        path.write_text(
            textwrap.dedent(
                """\
                detect_relations: true
                options:
                  type: INNODB
                package: orangehrmPimPlugin.lib.model.doctrine
                Employee:
                  columns:
                    id: integer
                Skill:
                  package: custom.lib.model.doctrine
                  options:
                    type: MyISAM
                """
            )
        )
        models = YamlSchemaLoader().load(str(path))
        assert list(models) == ["Employee", "Skill"]
        assert models["Employee"]["detect_relations"] is True
        assert models["Employee"]["options"] == {"type": "INNODB"}
        assert models["Employee"]["package"] == "orangehrmPimPlugin.lib.model.doctrine"
        # a model's own attributes win over the globals
        assert models["Skill"]["package"] == "custom.lib.model.doctrine"
        assert models["Skill"]["options"] == {"type": "MyISAM"}
        assert models["Skill"]["detect_relations"] is True

    def test_globals_do_not_leak_between_files(self, tmp_path: Path) -> None:
        (tmp_path / "a.yml").write_text("options:\n  type: INNODB\nEmployee: {}\n")
        (tmp_path / "b.yml").write_text("Address: {}\n")
        models = YamlSchemaLoader().load(str(tmp_path))
        assert models["Employee"]["options"] == {"type": "INNODB"}
        assert models["Address"] == {}

    def test_model_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.yml"
        path.write_text("Employee: true\n")
        with pytest.raises(SchemaNotFoundError, match="model Employee is not a mapping"):
            YamlSchemaLoader().load(str(path))


class TestPrepareSchemaFile:
    """Tests for schema consolidation."""

    def test_merges_plugins_and_project(self, schema_dir: Path, tmp_path: Path) -> None:
        plugin_dir = tmp_path / "plugins" / "orangehrmPimPlugin" / "config" / "doctrine"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "schema.yml").write_text(
            "Skill:\n  columns:\n    name: string(120)\n"
            "Address:\n  package: custom.lib.model.doctrine\n"
        )

        path = prepare_schema_file(
            str(schema_dir),
            str(tmp_path / "cache"),
            {"orangehrmPimPlugin": str(plugin_dir)},
        )

        with open(path) as f:
            models = yaml.safe_load(f)
        assert list(models) == ["Skill", "Address", "Location", "Employee"]
        assert models["Skill"]["package"] == "orangehrmPimPlugin.lib.model.doctrine"
        # project definitions override plugin models of the same name
        assert models["Address"] == {}

    def test_keeps_explicit_package(self, tmp_path: Path) -> None:
        plugin_dir = tmp_path / "plugin"
        plugin_dir.mkdir()
        (plugin_dir / "schema.yml").write_text("Skill:\n  package: fooPlugin.lib.model.doctrine\n")
        project = tmp_path / "schema.yml"
        project.write_text("Employee: {}\n")

        path = prepare_schema_file(str(project), str(tmp_path / "cache"), {"barPlugin": str(plugin_dir)})
        models = YamlSchemaLoader().load(path)
        assert models["Skill"]["package"] == "fooPlugin.lib.model.doctrine"

    def test_missing_project_schema(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaNotFoundError):
            prepare_schema_file(str(tmp_path / "missing"), str(tmp_path / "cache"))

    def test_globals_are_not_models(self, tmp_path: Path) -> None:
        project = tmp_path / "schema.yml"
        project.write_text("detect_relations: true\noptions:\n  type: INNODB\nEmployee: {}\n")

        path = prepare_schema_file(str(project), str(tmp_path / "cache"))
        with open(path) as f:
            models = yaml.safe_load(f)
        assert list(models) == ["Employee"]
        assert models["Employee"] == {"options": {"type": "INNODB"}, "detect_relations": True}

    def test_no_models(self, tmp_path: Path) -> None:
        empty = tmp_path / "schema.yml"
        empty.write_text("")
        with pytest.raises(SchemaNotFoundError, match="no models"):
            prepare_schema_file(str(empty), str(tmp_path / "cache"))
