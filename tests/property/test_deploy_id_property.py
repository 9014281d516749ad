import re
from datetime import datetime

from hypothesis import given
from hypothesis import strategies as st

from launchpad.core.deploy_manager import format_deploy_id

_DEPLOY_ID = re.compile(r"\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}")

_moments = st.datetimes(min_value=datetime(1970, 1, 1), max_value=datetime(9999, 12, 31))


@given(_moments)
def test_deploy_id_matches_timestamp_pattern(moment: datetime) -> None:
    deploy_id = format_deploy_id(moment)
    assert _DEPLOY_ID.fullmatch(deploy_id)
    assert datetime.strptime(deploy_id, "%Y-%m-%d-%H-%M-%S") == moment.replace(microsecond=0)


@given(_moments, st.integers(min_value=0, max_value=999_999))
def test_deploy_ids_within_one_second_are_identical(moment: datetime, microsecond: int) -> None:
    assert format_deploy_id(moment) == format_deploy_id(moment.replace(microsecond=microsecond))
