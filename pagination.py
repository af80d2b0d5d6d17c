class Paginator:
    """Tracks how many records have been pulled from the source so far."""

    def __init__(self, page_size: int = 200):
        self.page_size = max(1, page_size)
        self.loaded_rows = 0

    def reset(self):
        self.loaded_rows = 0

    def record(self, count: int):
        self.loaded_rows += max(0, count)

    @property
    def next_offset(self) -> int:
        return self.loaded_rows

    def is_short_page(self, count: int) -> bool:
        return count < self.page_size

    def should_fetch(self, selected_index, eod: bool) -> bool:
        if eod or selected_index is None:
            return False
        return selected_index + 1 >= self.loaded_rows
