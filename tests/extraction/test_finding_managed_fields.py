import pytest

from kapply._cogs.structs.bodies import Body
from kapply._cogs.structs.errors import FieldsParsingError
from kapply._core.engines.managedfields import find_managed_fields


def test_finding_the_apply_entry(event_body):
    entry = find_managed_fields(Body(event_body), 'my-controller')
    assert entry is event_body['metadata']['managedFields'][0]


def test_finding_the_status_entry(event_body):
    entry = find_managed_fields(Body(event_body), 'my-controller', 'status')
    assert entry is event_body['metadata']['managedFields'][3]


def test_finding_with_other_operations(event_body):
    entry = find_managed_fields(Body(event_body), 'kubectl-edit', operations={'Update'})
    assert entry is event_body['metadata']['managedFields'][4]


def test_finding_with_no_match(event_body):
    assert find_managed_fields(Body(event_body), 'kubectl-edit') is None
    assert find_managed_fields(Body(event_body), 'other-controller', 'status') is None
    assert find_managed_fields(Body(event_body), 'unknown') is None


def test_finding_in_an_object_with_no_metadata():
    assert find_managed_fields(Body({}), 'my-controller') is None


def test_absent_subresource_is_the_main_resource():
    body = Body({'metadata': {'managedFields': [
        {'manager': 'm', 'operation': 'Apply', 'subresource': ''},
    ]}})
    assert find_managed_fields(body, 'm') is not None
    assert find_managed_fields(body, 'm', '') is not None
    assert find_managed_fields(body, 'm', 'status') is None


def test_finding_in_malformed_entries():
    body = Body({'metadata': {'managedFields': ['not-an-object']}})
    with pytest.raises(FieldsParsingError):
        find_managed_fields(body, 'm')
