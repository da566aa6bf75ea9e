"""Default per-tick pipeline."""

from importlib import resources
from pathlib import Path

from dismal.core.pipeline import Pipeline


def create_default_pipeline() -> Pipeline:
    """
    Create the default tick pipeline from ``default_pipeline.yml``.

    The order is fixed: rosters are rebuilt, the market is cleared, every
    agent reprices, then the optional agent dump and statistics sample run.
    Users can modify the result with insert_after() and remove(), or load
    their own file with Pipeline.from_yaml().
    """
    traversable = resources.files("dismal") / "default_pipeline.yml"
    with resources.as_file(traversable) as yaml_fs_path:
        return Pipeline.from_yaml(Path(yaml_fs_path))
