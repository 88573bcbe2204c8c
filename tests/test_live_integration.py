import logging
import os

import pytest

from tomba_finder.tomba import TombaClient, make_retry_session

requires_live = pytest.mark.skipif(
    os.getenv("RUN_LIVE_INTEGRATION") != "1",
    reason="Set RUN_LIVE_INTEGRATION=1 to execute live integration tests.",
)


@requires_live
def test_live_email_finder_smoke() -> None:
    client = TombaClient(
        session=make_retry_session("tomba-finder-tests"),
        api_key=os.environ["TOMBA_API_KEY"],
        api_secret=os.environ["TOMBA_API_SECRET"],
        timeout=15.0,
        logger=logging.getLogger("test"),
    )
    payload = client.email_finder("stripe.com", "Patrick", "Collison")
    assert "data" in payload
