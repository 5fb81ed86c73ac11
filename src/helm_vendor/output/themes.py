"""Status color maps."""

from helm_vendor.models import ApplyStatus

APPLY_STATUS_COLORS: dict[ApplyStatus, str] = {
    ApplyStatus.CLEAN: "green",
    ApplyStatus.PARTIAL: "yellow bold",
}


def styled_apply_status(status: ApplyStatus) -> str:
    color = APPLY_STATUS_COLORS.get(status, "white")
    return f"[{color}]{status.value}[/{color}]"


def styled_flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"
