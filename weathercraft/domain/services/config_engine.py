"""
CONFIG ENGINE (ENGINE-0)
Load, validate, and expose the roofing catalogs

RESPONSIBILITIES:
- Load YAML configuration files
- Validate configuration integrity
- Expose read-only typed objects

RULES:
❌ No defaults if config missing
✅ Fail fast on invalid config
✅ Deterministic output
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from weathercraft.domain.models import (
    Assembly,
    AssemblyCatalog,
    Component,
    Material,
    MaterialCategory,
    Project,
    ScopeType,
    WeatherConstraint,
    WorkPackage,
)

logger = logging.getLogger(__name__)

_CONSTRAINT_KEYS = {
    "min_temp",
    "max_temp",
    "must_be_rising",
    "no_precipitation",
    "max_wind_speed",
    "max_humidity",
    "cure_time_hours",
}


def parse_constraint(data: Optional[dict]) -> WeatherConstraint:
    """Build a WeatherConstraint from a YAML mapping"""
    data = data or {}
    unknown = set(data) - _CONSTRAINT_KEYS
    if unknown:
        raise ValueError(f"Unknown constraint keys: {sorted(unknown)}")

    def _num(key: str) -> Optional[float]:
        value = data.get(key)
        return None if value is None else float(value)

    return WeatherConstraint(
        min_temp=_num("min_temp"),
        max_temp=_num("max_temp"),
        must_be_rising=bool(data.get("must_be_rising", False)),
        no_precipitation=bool(data.get("no_precipitation", False)),
        max_wind_speed=_num("max_wind_speed"),
        max_humidity=_num("max_humidity"),
        cure_time_hours=_num("cure_time_hours"),
    )


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for assemblies, materials, projects and packages
    """

    def __init__(self, config_dir: Path):
        """Initialize with config directory"""
        self.config_dir = Path(config_dir)
        self._assemblies: Optional[tuple[Assembly, ...]] = None
        self._materials: Optional[tuple[Material, ...]] = None
        self._projects: Optional[tuple[Project, ...]] = None
        self._work_packages: Optional[tuple[WorkPackage, ...]] = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_materials()
        self._load_assemblies()
        self._load_projects()
        self._load_work_packages()
        self._validate_all()
        logger.info(
            "Loaded %d assemblies, %d materials, %d projects, %d work packages",
            len(self._assemblies), len(self._materials),
            len(self._projects), len(self._work_packages),
        )

    def _read_yaml(self, filename: str) -> dict:
        path = self.config_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{filename} must contain a mapping at the top level")
        return data

    @staticmethod
    def _parse_items(
        filename: str,
        items: Optional[list],
        build: Callable[[dict], Any],
    ) -> list:
        """Build every entry of a catalog list, naming the file on malformed entries"""
        parsed = []
        for index, item in enumerate(items or []):
            try:
                parsed.append(build(item))
            except (KeyError, TypeError) as exc:
                raise ValueError(
                    f"{filename}: entry {index} is missing or has a malformed field ({exc!r})"
                ) from exc
        return parsed

    def _load_materials(self) -> None:
        """Load material catalog from materials.yml"""
        data = self._read_yaml("materials.yml")

        def build(item: dict) -> Material:
            return Material(
                id=item["id"],
                name=item["name"],
                category=MaterialCategory(item["category"]),
                description=item.get("description", ""),
                constraint=parse_constraint(item.get("constraints")),
                storage_temp_min=item.get("storage_temp_min"),
                storage_temp_max=item.get("storage_temp_max"),
                manufacturer_url=item.get("manufacturer_url"),
            )

        self._materials = tuple(self._parse_items("materials.yml", data.get("materials"), build))

    def _load_assemblies(self) -> None:
        """Load assemblies from assemblies.yml"""
        data = self._read_yaml("assemblies.yml")

        def build(item: dict) -> Assembly:
            components = tuple(
                Component(
                    id=comp["id"],
                    name=comp["name"],
                    description=comp.get("description", ""),
                    constraint=parse_constraint(comp.get("constraints")),
                    critical_note=comp.get("critical_note"),
                )
                for comp in item.get("components") or []
            )
            return Assembly(
                id=item["id"],
                name=item["name"],
                description=item.get("description", ""),
                components=components,
                scope_type=ScopeType(item["scope_type"]),
                min_lead_time_days=int(item["min_lead_time_days"]),
                min_work_window_hours=int(item["min_work_window_hours"]),
            )

        self._assemblies = tuple(self._parse_items("assemblies.yml", data.get("assemblies"), build))

    def _load_projects(self) -> None:
        """Load job sites from projects.yml"""
        data = self._read_yaml("projects.yml")

        def build(item: dict) -> Project:
            return Project(
                id=item["id"],
                name=item["name"],
                lat=float(item["lat"]),
                lon=float(item["lon"]),
                location=item.get("location", ""),
                default_materials=tuple(item.get("default_materials", [])),
            )

        self._projects = tuple(self._parse_items("projects.yml", data.get("projects"), build))

    def _load_work_packages(self) -> None:
        """
        Load winter work packages from work_packages.yml

        A package either names its own constraints or borrows them from
        the material referenced by source_id.
        """
        data = self._read_yaml("work_packages.yml")
        materials = {m.id: m for m in self._materials}

        def build(item: dict) -> WorkPackage:
            if "constraints" in item:
                constraint = parse_constraint(item["constraints"])
            else:
                source_id = item.get("source_id")
                if source_id not in materials:
                    raise ValueError(
                        f"Work package {item['id']} references unknown material: {source_id}"
                    )
                constraint = materials[source_id].constraint
            return WorkPackage(
                id=item["id"],
                name=item["name"],
                description=item.get("description", ""),
                constraint=constraint,
                required_hours=int(item["required_hours"]),
                lead_time_hours=int(item["lead_time_hours"]),
            )

        self._work_packages = tuple(
            self._parse_items("work_packages.yml", data.get("work_packages"), build)
        )

    def _validate_all(self) -> None:
        """Validate cross-file integrity"""
        for label, items in (
            ("assembly", self._assemblies),
            ("material", self._materials),
            ("project", self._projects),
            ("work package", self._work_packages),
        ):
            ids = [item.id for item in items]
            if len(ids) != len(set(ids)):
                raise ValueError(f"Duplicate {label} ids found in configuration")

        component_ids = [c.id for a in self._assemblies for c in a.components]
        if len(component_ids) != len(set(component_ids)):
            raise ValueError("Components must belong to exactly one assembly")

        material_ids = {m.id for m in self._materials}
        for project in self._projects:
            missing = set(project.default_materials) - material_ids
            if missing:
                raise ValueError(f"Project {project.id} references unknown materials: {sorted(missing)}")

        for package in self._work_packages:
            if package.required_hours <= 0:
                raise ValueError(f"Work package {package.id} must require positive hours")

    # ==========================================
    # PUBLIC ACCESSORS
    # ==========================================

    def _require(self, value: Any) -> Any:
        if value is None:
            raise RuntimeError("Configuration not loaded; call load_all() first")
        return value

    @property
    def assemblies(self) -> tuple[Assembly, ...]:
        return self._require(self._assemblies)

    @property
    def materials(self) -> tuple[Material, ...]:
        return self._require(self._materials)

    @property
    def projects(self) -> tuple[Project, ...]:
        return self._require(self._projects)

    @property
    def work_packages(self) -> tuple[WorkPackage, ...]:
        return self._require(self._work_packages)

    @property
    def catalog(self) -> AssemblyCatalog:
        return AssemblyCatalog(assemblies=self.assemblies, materials=self.materials)

    def get_project(self, project_id: str) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None
