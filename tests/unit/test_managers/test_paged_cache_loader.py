"""Tests for PagedCacheLoader."""

import dataclasses

from ticketdesk.core.errors import FetchError


def _query_all(session):
    results = []
    session.loader.query_all(results.append)
    return results


def test_query_all_shows_first_page(session, source):
    results = _query_all(session)

    controller = session.controller
    assert results[0].ok
    assert results[0].applied is True
    assert controller.is_initialized is True
    assert controller.is_loading is False
    assert controller.total_items == 100
    assert controller.total_pages == 4
    assert list(session.items) == source.expected_page(1, 25)
    assert source.fetch_calls == [(1, 25)]


def test_each_navigation_shows_the_fetched_page(session, source):
    _query_all(session)
    controller = session.controller

    for page in (2, 4, 3, 1, 4):
        controller.go_to_page(page)
        assert controller.current_page == page
        assert list(session.items) == source.expected_page(page, 25)
        assert controller.is_loading is False


def test_loading_current_page_twice_fetches_once(session, source):
    _query_all(session)
    before = list(session.items)
    results = []

    session.loader.load_current_page(results.append)
    session.loader.load_current_page(results.append)

    assert source.fetch_calls == [(1, 25)]
    assert [result.from_cache for result in results] == [True, True]
    assert list(session.items) == before


def test_revisited_page_is_served_from_cache(session, source):
    _query_all(session)
    controller = session.controller

    controller.next_page()
    controller.previous_page()
    controller.next_page()

    assert source.fetch_calls == [(1, 25), (2, 25)]
    assert session.loader.cached_pages == [1, 2]
    assert list(session.items) == source.expected_page(2, 25)


def test_page_size_change_invalidates_every_cached_page(session, source):
    _query_all(session)
    controller = session.controller
    controller.next_page()
    assert session.loader.cached_pages == [1, 2]

    controller.set_page_size(50)

    assert session.loader.cached_page_size == 50
    assert controller.current_page == 2
    assert source.fetch_calls[-1] == (2, 50)
    assert session.loader.cached_pages == [2]
    assert list(session.items) == source.expected_page(2, 50)

    controller.previous_page()

    assert source.fetch_calls[-1] == (1, 50)
    assert list(session.items) == source.expected_page(1, 50)


def test_old_epoch_entries_are_never_served(session, source):
    _query_all(session)
    controller = session.controller

    controller.set_page_size(50)
    controller.set_page_size(25)

    assert session.loader.cached_pages == [1]
    assert source.fetch_calls == [(1, 25), (1, 50), (1, 25)]


def test_failed_fetch_keeps_previous_page(session, source):
    _query_all(session)
    page_one = list(session.items)
    failures = []
    session.loader.load_failed.connect(failures.append)
    source.fail_pages.add(2)

    session.controller.next_page()

    controller = session.controller
    assert controller.is_loading is False
    assert controller.current_page == 2
    assert list(session.items) == page_one
    assert 2 not in session.loader.cached_pages
    assert len(failures) == 1
    assert isinstance(failures[0], FetchError)
    assert failures[0].page == 2
    assert isinstance(failures[0].__cause__, ConnectionError)


def test_failed_fetch_is_reported_to_the_caller(session, source):
    _query_all(session)
    source.fail_pages.add(1)
    session.loader.clear_cache()
    results = []

    session.loader.load_current_page(results.append)

    assert results[0].ok is False
    assert results[0].applied is False
    assert "page 1" in str(results[0].error)


def test_diff_update_only_overwrites_changed_positions(source):
    from ticketdesk.managers import ListSession

    source.records = source.records[:3]
    session = ListSession.create("tickets", source)
    _query_all(session)
    first, second, third = list(session.items)

    changed = dataclasses.replace(second, seat_no="05A")
    source.records = [dataclasses.replace(first), changed, dataclasses.replace(third)]
    changes = []
    session.items.items_changed.connect(lambda *args: changes.append(args))

    session.loader.clear_cache()
    session.loader.load_current_page()

    assert session.items[0] is first
    assert session.items[1] is changed
    assert session.items[2] is third
    assert changes == [(1, 1, 1)]


def test_length_change_replaces_whole_list(source):
    from ticketdesk.managers import ListSession

    source.records = source.records[:30]
    session = ListSession.create("tickets", source)
    _query_all(session)
    changes = []
    session.items.items_changed.connect(lambda *args: changes.append(args))

    session.controller.next_page()

    assert list(session.items) == source.records[25:30]
    assert changes == [(0, 25, 0), (0, 0, 5)]


def test_latest_requested_page_wins(manual_session, manual_scheduler, source):
    manual_session.loader.query_all()
    manual_scheduler.run_all()
    controller = manual_session.controller

    controller.next_page()
    manual_scheduler.run_idle()
    controller.next_page()
    manual_scheduler.run_idle()
    assert len(manual_scheduler.background) == 2

    # Page 2 finishes after the user already moved on to page 3
    manual_scheduler.run_background()
    manual_scheduler.run_idle()

    assert controller.current_page == 3
    assert controller.is_loading is True
    assert list(manual_session.items) == source.expected_page(1, 25)
    assert 2 in manual_session.loader.cached_pages

    manual_scheduler.run_background()
    manual_scheduler.run_idle()

    assert controller.is_loading is False
    assert list(manual_session.items) == source.expected_page(3, 25)


def test_stale_completion_after_latest_is_not_applied(manual_session, manual_scheduler, source):
    manual_session.loader.query_all()
    manual_scheduler.run_all()
    controller = manual_session.controller

    controller.go_to_page(2)
    manual_scheduler.run_idle()
    controller.go_to_page(3)
    manual_scheduler.run_idle()

    manual_scheduler.run_background(index=1)
    manual_scheduler.run_idle()
    assert list(manual_session.items) == source.expected_page(3, 25)
    assert controller.is_loading is False

    manual_scheduler.run_background()
    manual_scheduler.run_idle()

    assert list(manual_session.items) == source.expected_page(3, 25)
    assert controller.is_loading is False


def test_requests_for_a_page_in_flight_share_one_fetch(manual_session, manual_scheduler, source):
    manual_session.loader.query_all()
    manual_scheduler.run_all()
    controller = manual_session.controller
    results = []

    controller.next_page()
    manual_scheduler.run_idle()
    manual_session.loader.load_current_page(results.append)
    manual_scheduler.run_all()

    assert source.fetch_calls.count((2, 25)) == 1
    assert len(results) == 1
    assert results[0].applied is True


def test_reset_clears_items_and_drops_pending_fetches(manual_session, manual_scheduler, source):
    manual_session.loader.query_all()
    manual_scheduler.run_all()
    controller = manual_session.controller

    controller.next_page()
    manual_scheduler.run_idle()
    controller.reset()
    manual_scheduler.run_all()

    assert len(manual_session.items) == 0
    assert manual_session.loader.cached_pages == []
    assert controller.is_initialized is False
    assert controller.is_loading is False


def test_reset_during_query_all_first_page_stays_reset(
    manual_session, manual_scheduler, source
):
    results = []
    manual_session.loader.query_all(results.append)
    manual_scheduler.run_background()
    manual_scheduler.run_idle()
    assert source.fetch_calls == []
    assert len(manual_scheduler.background) == 1

    controller = manual_session.controller
    controller.reset()
    manual_scheduler.run_all()

    assert controller.is_initialized is False
    assert controller.is_loading is False
    assert controller.total_items == 0
    assert len(manual_session.items) == 0
    assert manual_session.loader.cached_pages == []
    assert source.fetch_calls == [(1, 25)]
    assert results[0].dropped is True
    assert results[0].applied is False


def test_reset_during_query_all_count_is_dropped(manual_session, manual_scheduler, source):
    results = []
    manual_session.loader.query_all(results.append)
    manual_session.controller.reset()
    manual_scheduler.run_all()

    assert manual_session.controller.is_initialized is False
    assert manual_session.controller.total_items == 0
    assert source.fetch_calls == []
    assert results[0].dropped is True


def test_page_size_change_while_counting_keeps_loading(
    manual_session, manual_scheduler, source
):
    controller = manual_session.controller
    manual_session.loader.query_all()

    controller.set_page_size(50)

    assert controller.is_loading is True
    assert manual_session.loader.is_fetching() is True

    manual_scheduler.run_all()

    assert controller.is_loading is False
    assert controller.is_initialized is True
    assert source.fetch_calls == [(1, 50)]
    assert list(manual_session.items) == source.expected_page(1, 50)


def test_query_all_after_reset_reloads(session, source):
    _query_all(session)
    session.controller.go_to_page(3)
    session.controller.reset()

    results = _query_all(session)

    assert results[0].applied is True
    assert session.controller.current_page == 1
    assert list(session.items) == source.expected_page(1, 25)


def test_query_all_count_failure(session, source):
    source.fail_count = True

    results = _query_all(session)

    assert isinstance(results[0].error, FetchError)
    assert session.controller.is_loading is False
    assert session.controller.is_initialized is False
    assert source.fetch_calls == []


def test_refresh_in_background_updates_totals_only(session, source):
    _query_all(session)
    session.controller.next_page()
    fetches = list(source.fetch_calls)
    source.records.extend(source.records[:10])
    outcomes = []

    session.loader.refresh_in_background(outcomes.append)

    controller = session.controller
    assert outcomes == [None]
    assert controller.total_items == 110
    assert controller.total_pages == 5
    assert controller.current_page == 2
    assert source.fetch_calls == fetches
    assert session.loader.cached_pages == []


def test_refresh_in_background_leaves_foreground_loading_alone(
    manual_session, manual_scheduler, source
):
    manual_session.loader.query_all()
    manual_scheduler.run_all()
    controller = manual_session.controller

    controller.next_page()
    manual_scheduler.run_idle()
    assert controller.is_loading is True

    manual_session.loader.refresh_in_background()
    manual_scheduler.run_background(index=1)
    manual_scheduler.run_idle()

    assert controller.is_loading is True

    manual_scheduler.run_all()

    assert controller.is_loading is False
    assert list(manual_session.items) == source.expected_page(2, 25)


def test_refresh_in_background_reloads_when_page_is_clamped(session, source):
    _query_all(session)
    session.controller.last_page()
    source.records = source.records[:30]

    session.loader.refresh_in_background()

    assert session.controller.total_pages == 2
    assert session.controller.current_page == 2
    assert list(session.items) == source.records[25:30]


def test_refresh_in_background_failure_is_reported(session, source):
    _query_all(session)
    source.fail_count = True
    failures = []
    outcomes = []
    session.loader.load_failed.connect(failures.append)

    session.loader.refresh_in_background(outcomes.append)

    assert isinstance(outcomes[0], FetchError)
    assert failures == outcomes
    assert session.controller.total_items == 100


def test_page_size_change_before_first_query_does_not_stick_loading(session, source):
    session.controller.set_page_size(50)

    assert session.controller.is_loading is False
    assert source.fetch_calls == []


def test_coroutine_fetch_functions_are_supported(source):
    from ticketdesk.managers import PagedCacheLoader, PaginationController

    async def fetch(page, page_size):
        return source.fetch_page(page, page_size)

    async def count():
        return source.count()

    controller = PaginationController()
    loader = PagedCacheLoader(controller, fetch=fetch, count=count)
    results = []

    loader.query_all(results.append)

    assert results[0].applied is True
    assert list(loader.items) == source.expected_page(1, 25)
