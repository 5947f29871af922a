import logging

from tldr.core.logging import SmartContextFormatter, ThirdPartyFilter


def _record(name: str, level: int, **extra) -> logging.LogRecord:
    record = logging.LogRecord(name, level, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_extra_fields():
    formatter = SmartContextFormatter("%(message)s")

    assert formatter.format(_record("tldr.x", logging.INFO, length="brief")) == "hello world [length=brief]"


def test_formatter_without_extras_is_plain():
    formatter = SmartContextFormatter("%(levelname)s %(message)s")

    assert formatter.format(_record("tldr.x", logging.INFO)) == "INFO hello world"


def test_third_party_filter_keeps_app_records():
    log_filter = ThirdPartyFilter({"httpx": logging.WARNING})

    assert log_filter.filter(_record("tldr.services.fetcher", logging.DEBUG))


def test_third_party_filter_drops_chatter():
    log_filter = ThirdPartyFilter({"uvicorn": logging.WARNING, "uvicorn.error": logging.INFO})

    assert not log_filter.filter(_record("httpx", logging.INFO))
    assert not log_filter.filter(_record("uvicorn.access", logging.INFO))
    assert log_filter.filter(_record("uvicorn.error", logging.INFO))
    assert log_filter.filter(_record("httpx", logging.WARNING))
