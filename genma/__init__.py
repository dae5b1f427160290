import gettext
from pathlib import Path

# Make "_" available in all modules before they are used.
base_dir = Path(__file__).parent
gettext.install("genma", base_dir / "locale")
