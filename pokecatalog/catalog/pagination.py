# ABOUTME: Page number layout for the pagination control.
# ABOUTME: Computes the visible page window with ellipses and quick-jump targets.

import math

QUICK_JUMP_THRESHOLD = 10
MAX_JUMP_TARGETS = 3


def visible_pages(current: int, total: int, delta: int = 2) -> list[int | None]:
    """Page numbers to show around ``current``, with None where pages are elided.

    The first and last page are always shown.

    Examples:
        >>> visible_pages(10, 20)
        [1, None, 8, 9, 10, 11, 12, None, 20]
    """
    if total <= 1:
        return [1] if total == 1 else []

    window = list(range(max(2, current - delta), min(total - 1, current + delta) + 1))

    pages: list[int | None] = [1]
    if current - delta > 2:
        pages.append(None)
    pages.extend(window)
    if current + delta < total - 1:
        pages.append(None)
    pages.append(total)
    return pages


def jump_targets(current: int, total: int) -> list[int]:
    """Up to three quick-jump pages for long result sets.

    Candidates are the first page, the quartiles and the last page, skipping ``current``.
    Nothing is offered for ``total`` of 10 pages or fewer.
    """
    if total <= QUICK_JUMP_THRESHOLD:
        return []

    candidates = [
        1,
        math.ceil(total * 0.25),
        math.ceil(total * 0.5),
        math.ceil(total * 0.75),
        total,
    ]
    targets: list[int] = []
    for page in candidates:
        if page != current and page not in targets:
            targets.append(page)
    return targets[:MAX_JUMP_TARGETS]
