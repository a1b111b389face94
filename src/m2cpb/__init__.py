"""m2cpb — Magento2 Component Package Builder.

Builds a ZIP package of a Magento2 component (module, theme, language or
library) from its source tree and development composer.json.
"""

from __future__ import annotations

from m2cpb.build import PackageBuilder
from m2cpb.core import BuilderConfig, BuildResult, PackageBuildError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BuilderConfig",
    "BuildResult",
    "PackageBuildError",
    "PackageBuilder",
]
