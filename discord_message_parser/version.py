from typing import Final

VERSION: Final[str] = "0.3.0"
