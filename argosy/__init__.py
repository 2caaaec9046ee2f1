__title__ = 'argosy'
__license__ = 'MIT'
__version__ = "0.0.0"

from .arguments import *
from .arity import *
from .converters import *
from .faults import *
from .help import *
from .parser import *
from .registry import *
from .targets import *
from .tokens import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every submodule
__all__ += arguments.__all__  # type: ignore[attr-defined]
__all__ += arity.__all__  # type: ignore[attr-defined]
__all__ += converters.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += help.__all__  # type: ignore[attr-defined]
__all__ += parser.__all__  # type: ignore[attr-defined]
__all__ += registry.__all__  # type: ignore[attr-defined]
__all__ += targets.__all__  # type: ignore[attr-defined]
__all__ += tokens.__all__  # type: ignore[attr-defined]
