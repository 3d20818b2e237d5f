"""Allow running monitorctl with ``python -m monitorctl``."""

from monitorctl.cli.main import app

app()
