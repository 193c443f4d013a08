"""Currently viewed forecast day."""


class SelectionState:
    """Holds the selected day key.

    ``select_day`` does not validate against the live day order; the
    forecast controller keeps the selection valid through ``reset`` and
    ``carry_over`` whenever it applies a new payload.
    """

    def __init__(self) -> None:
        self.selected_day: str | None = None

    def select_day(self, day: str | None) -> None:
        self.selected_day = day

    def reset(self, day_order: list[str]) -> None:
        """Select the first day of a freshly loaded forecast."""
        self.selected_day = day_order[0] if day_order else None

    def carry_over(self, day_order: list[str]) -> None:
        """Keep the current day if it survived a refresh, else fall back to the first."""
        if self.selected_day is not None and self.selected_day in day_order:
            return
        self.reset(day_order)

    def clear(self) -> None:
        self.selected_day = None
