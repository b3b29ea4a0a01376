"""Front panel command."""

import threading
from enum import Enum
from typing import Annotated

import typer

from warehousectl.cli.types import OutputFormat, emit_result, get_settings
from warehousectl.device.front_panel import FrontPanelController, FrontPanelState, SysfsFrontPanel
from warehousectl.utils.formatting import print_info

app = typer.Typer(
    help="Drive the front panel LEDs.",
    no_args_is_help=True,
)


class PanelStateChoice(str, Enum):
    """Front panel states selectable on the command line."""

    NONE = "none"
    IN_PROGRESS = "in-progress"
    FAILED = "failed"

    @property
    def state(self) -> FrontPanelState:
        """The matching FrontPanelState."""
        return {
            PanelStateChoice.NONE: FrontPanelState.NONE,
            PanelStateChoice.IN_PROGRESS: FrontPanelState.IN_PROGRESS,
            PanelStateChoice.FAILED: FrontPanelState.FAILED,
        }[self]


@app.command("set")
def set_panel(
    ctx: typer.Context,
    state: Annotated[
        PanelStateChoice,
        typer.Argument(help="State to show.", case_sensitive=False),
    ],
    watch: Annotated[
        bool,
        typer.Option("--watch", "-w", help="Keep animating until interrupted."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TEXT,
) -> None:
    """Show a download state on the front panel LEDs."""
    settings = get_settings(ctx)
    driver = (
        SysfsFrontPanel(settings.front_panel_led_dir)
        if settings.front_panel_led_dir is not None
        else None
    )
    controller = FrontPanelController(driver, interval=settings.front_panel_interval)

    result = controller.set_state(state.state)
    if not (result.success and watch and controller.animating):
        controller.stop()
        emit_result(result, output_format, f"Front panel set to {state.value}.")
        return

    print_info(f"Front panel set to {state.value}; press Ctrl+C to stop.")
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        controller.stop()
