"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import m2cpb` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers for component repositories
# =============================================================================


def awesome_manifest(**overrides: Any) -> dict[str, Any]:
    """Composer manifest of the `awesome-module` fixture repo."""
    data: dict[str, Any] = {
        "name": "awesome-module",
        "description": "An awesome Magento2 module",
        "version": "1.1.2",
        "type": "magento2-module",
        "license": "MIT",
        "authors": [{"name": "Jane Doe", "email": "jane@example.com"}],
        "require": {"php": "~7.0.0|~7.1.0"},
        "require-dev": {"phpunit/phpunit": "^6.0"},
        "autoload": {"psr-4": {"Awesome\\Module\\": "src/"}, "files": ["src/registration.php"]},
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


def write_json(path: Path, obj: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2) + "\n", encoding="utf-8")


def make_component_repo(root: Path, manifest: dict[str, Any] | None = None) -> tuple[Path, Path]:
    """Create `<root>/composer.json` + a component under `<root>/src`.

    Returns (src_dir, composer_json_path).
    """
    src = root / "src"
    (src / "etc").mkdir(parents=True)
    (src / "Model").mkdir()
    (src / "registration.php").write_text(
        "<?php\n\\Magento\\Framework\\Component\\ComponentRegistrar::register(\n"
        "    \\Magento\\Framework\\Component\\ComponentRegistrar::MODULE, 'Awesome_Module', __DIR__);\n",
        encoding="utf-8",
    )
    (src / "etc" / "module.xml").write_text('<module name="Awesome_Module"/>\n', encoding="utf-8")
    (src / "Model" / "Thing.php").write_text("<?php\nclass Thing {}\n", encoding="utf-8")

    composer = root / "composer.json"
    write_json(composer, manifest if manifest is not None else awesome_manifest())
    return src, composer
