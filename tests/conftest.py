"""
CabinKit Test Configuration and Fixtures

Provides a controllable clock, pre-built stores/projects and a helper for
writing JSON fixture files.
"""

import json
import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any


class FixedClock:
    """
    Clock for deterministic timestamps.

    Returns the same instant until advanced.

    Usage:
        clock = FixedClock()
        store = ProjectStore(clock=clock)
        clock.advance(seconds=5)
    """

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock():
    """Fixed clock starting 2024-01-15 12:00 UTC."""
    return FixedClock()


@pytest.fixture
def store(clock):
    """Empty ProjectStore on the fixed clock."""
    from cabinkit.core.project_store import ProjectStore

    return ProjectStore(clock=clock)


@pytest.fixture
def configured_project():
    """Project with every dimension and selection filled in."""
    from cabinkit.core.enums import FoundationType, RoofMaterial, WallMaterial
    from cabinkit.core.project import Project

    return Project(
        name="Lakeside Retreat",
        width=24.0,
        length=16.0,
        height=20.0,
        foundation_type=FoundationType.CONCRETE_SLAB,
        wall_material=WallMaterial.WOOD_2X6,
        roof_material=RoofMaterial.METAL,
        area=384.0,
        estimated_cost=18500.0,
    )


@pytest.fixture
def service(clock):
    """DesignService with built-in rates, templates and static policy."""
    from cabinkit.service import DesignService

    return DesignService(clock=clock)


@pytest.fixture
def write_json(tmp_path):
    """Write an object to a JSON file under tmp_path and return its path."""

    def _write(name: str, data: Any) -> str:
        path = Path(tmp_path) / name
        path.write_text(json.dumps(data))
        return str(path)

    return _write
