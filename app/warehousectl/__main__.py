"""Allow running as ``python -m warehousectl``."""

from warehousectl.cli.main import app

app(prog_name="warehousectl")
