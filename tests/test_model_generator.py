"""Tests for PHP model class generation."""

import textwrap
from pathlib import Path

import pytest

from model_builder.errors import GenerationError
from model_builder.generators.model_generator import (
    TemplateModelGenerator,
    base_class_path,
)
from model_builder.generators.template_manager import TemplateManager
from model_builder.utils.config import BuilderOptions

SCHEMA = textwrap.dedent(
    """\
    Employee:
      tableName: hs_hr_employee
      columns:
        emp_number:
          name: emp_number as empNumber
          type: integer(4)
          primary: true
        emp_firstname as firstName: string(100)
      relations:
        addresses:
          class: Address
          type: many
          local: emp_number
          foreign: emp_number
    Skill:
      package: orangehrmPimPlugin.lib.model.doctrine
      columns:
        name: string(120)
    """
)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """Write the sample schema to a file."""
    path = tmp_path / "schema.yml"
    path.write_text(SCHEMA)
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "lib" / "model" / "doctrine"


class TestBaseClassPath:
    """Tests for base_class_path."""

    def test_project_model(self) -> None:
        path = base_class_path("lib/model/doctrine", "Employee", None, BuilderOptions())
        assert path == Path("lib/model/doctrine/base/BaseEmployee.class.php")

    def test_plugin_model(self) -> None:
        path = base_class_path(
            "models",
            "Skill",
            "orangehrmPimPlugin.lib.model.doctrine",
            BuilderOptions(suffix=".php", base_classes_directory="generated"),
        )
        assert path == Path("models/orangehrmPimPlugin/generated/BaseSkill.php")


class TestTemplateModelGenerator:
    """Tests for TemplateModelGenerator.import_schema."""

    def test_writes_all_classes(self, schema_file: Path, output_dir: Path) -> None:
        written = TemplateModelGenerator().import_schema(
            str(schema_file), "yml", str(output_dir)
        )
        expected = [
            output_dir / "base" / "BaseEmployee.class.php",
            output_dir / "Employee.class.php",
            output_dir / "EmployeeTable.class.php",
            output_dir / "orangehrmPimPlugin" / "base" / "BaseSkill.class.php",
            output_dir / "orangehrmPimPlugin" / "Skill.class.php",
            output_dir / "orangehrmPimPlugin" / "SkillTable.class.php",
        ]
        assert written == [str(p) for p in expected]
        assert all(p.exists() for p in expected)

    def test_base_class_content(self, schema_file: Path, output_dir: Path) -> None:
        TemplateModelGenerator().import_schema(str(schema_file), "yml", str(output_dir))
        code = (output_dir / "base" / "BaseEmployee.class.php").read_text()

        assert " * @property integer $empNumber\n" in code
        assert " * @property string $firstName\n" in code
        assert " * @property Doctrine_Collection $addresses\n" in code
        assert "abstract class BaseEmployee extends sfDoctrineRecord" in code
        assert "$this->setTableName('hs_hr_employee');" in code
        assert "$this->hasColumn('emp_number as empNumber', 'integer', 4, array(" in code
        assert "             'primary' => true," in code
        assert "$this->hasColumn('emp_firstname as firstName', 'string', 100);" in code
        assert "$this->hasMany('Address as addresses', array(" in code
        assert "             'foreign' => 'emp_number'));" in code
        assert "@subpackage ##SUBPACKAGE##" in code

    def test_existing_stub_is_kept(self, schema_file: Path, output_dir: Path) -> None:
        output_dir.mkdir(parents=True)
        stub = output_dir / "Employee.class.php"
        stub.write_text("custom")

        written = TemplateModelGenerator().import_schema(
            str(schema_file), "yml", str(output_dir)
        )
        assert str(stub) not in written
        assert stub.read_text() == "custom"

    def test_base_class_is_overwritten(self, schema_file: Path, output_dir: Path) -> None:
        base = output_dir / "base" / "BaseEmployee.class.php"
        base.parent.mkdir(parents=True)
        base.write_text("stale")

        TemplateModelGenerator().import_schema(str(schema_file), "yml", str(output_dir))
        assert base.read_text() != "stale"

    def test_options_disable_classes(self, schema_file: Path, output_dir: Path) -> None:
        options = BuilderOptions(generate_base_classes=False, generate_table_classes=False)
        written = TemplateModelGenerator(options).import_schema(
            str(schema_file), "yml", str(output_dir)
        )
        assert [Path(p).name for p in written] == ["Employee.class.php", "Skill.class.php"]

    def test_unsupported_format(self, schema_file: Path, output_dir: Path) -> None:
        with pytest.raises(GenerationError, match="Unsupported"):
            TemplateModelGenerator().import_schema(str(schema_file), "xml", str(output_dir))

    def test_template_failure(self, schema_file: Path, output_dir: Path, tmp_path: Path) -> None:
        templates = tmp_path / "templates"
        templates.mkdir()
        generator = TemplateModelGenerator(template_manager=TemplateManager(str(templates)))
        with pytest.raises(GenerationError, match="Employee"):
            generator.import_schema(str(schema_file), "yml", str(output_dir))

    def test_schema_globals_are_not_models(self, tmp_path: Path, output_dir: Path) -> None:
        schema = tmp_path / "globals.yml"
        schema.write_text(
            "detect_relations: true\noptions:\n  type: INNODB\n"
            "Employee:\n  columns:\n    id: ~\n"
        )
        written = TemplateModelGenerator().import_schema(str(schema), "yml", str(output_dir))

        assert [Path(p).name for p in written] == [
            "BaseEmployee.class.php",
            "Employee.class.php",
            "EmployeeTable.class.php",
        ]
        code = (output_dir / "base" / "BaseEmployee.class.php").read_text()
        assert " * @property string $id\n" in code
