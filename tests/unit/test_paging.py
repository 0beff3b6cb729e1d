from __future__ import annotations

import pytest

from workflow_definitions.server.paging import PageRequest, get_page


def test_get_page_slices_in_order() -> None:
    page = get_page(["a", "b", "c", "d", "e"], PageRequest(page=1, size=2))

    assert page.elements == ["c", "d"]
    assert page.total_elements == 5
    assert page.total_pages == 3
    assert page.number == 1


def test_empty_sequence_has_no_pages() -> None:
    page = get_page([], PageRequest())

    assert page.elements == []
    assert page.total_pages == 0


def test_page_request_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        PageRequest(page=-1)
    with pytest.raises(ValueError):
        PageRequest(size=0)
