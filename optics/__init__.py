__title__ = 'optics'
__author__ = 'Optics contributors'
__license__ = 'MIT'
__version__ = "0.1.0"

from .arguments import *
from .commands import *
from .faults import *
from .help import *
from .options import *
from .output import *
from .subcommands import *
from .utils import Unset

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info",
    "Unset",
)

# Load the exposed API of the arguments
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the options
__all__ += options.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the subcommands
__all__ += subcommands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the output channels
__all__ += output.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help layout
__all__ += help.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
