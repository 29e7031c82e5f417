import pytest

from booksmart.records.client import RecordClientError


def _seed_bus_bookings(record_client) -> None:
    record_client.create_record('bus_booking', {
        'records': [
            {
                'Name': 'Austin to Dallas',
                'origin': 'Austin',
                'destination': 'Dallas',
                'date': '2099-03-01',
                'time': '08:00',
                'passenger_name': 'Ada',
                'passenger_count': 1,
                'seat_type': 'regular',
            },
            {
                'Name': 'Austin to Houston',
                'origin': 'Austin',
                'destination': 'Houston',
                'date': '2099-03-02',
                'time': '09:30',
                'passenger_name': 'Grace',
                'passenger_count': 2,
                'seat_type': 'sleeper',
            },
            {
                'Name': 'Dallas to Houston',
                'origin': 'Dallas',
                'destination': 'Houston',
                'date': '2099-03-01',
                'time': '12:00',
                'passenger_name': 'Linus',
                'passenger_count': 3,
                'seat_type': 'business',
            },
        ]
    })


def test_create_record_assigns_id_and_created_on(record_client) -> None:
    response = record_client.create_record('appointment1', {
        'records': [{
            'Name': 'Ada Lovelace',
            'email': 'ada@example.com',
            'service': 'Massage Therapy',
            'date': '2099-01-05',
            'time': '10:00',
            'status': 'confirmed',
        }]
    })

    assert response['success'] is True
    data = response['results'][0]['data']
    assert data['Id'] == 1
    assert data['Name'] == 'Ada Lovelace'
    assert data['CreatedOn'] is not None
    assert data['phone'] == ''


def test_fetch_records_projects_requested_fields(record_client) -> None:
    _seed_bus_bookings(record_client)

    response = record_client.fetch_records('bus_booking', {
        'Fields': [{'Field': {'Name': 'Id'}}, {'Field': {'Name': 'passenger_name'}}],
    })

    assert response['data'] == [
        {'Id': 1, 'passenger_name': 'Ada'},
        {'Id': 2, 'passenger_name': 'Grace'},
        {'Id': 3, 'passenger_name': 'Linus'},
    ]


def test_fetch_records_applies_exact_match_conditions(record_client) -> None:
    _seed_bus_bookings(record_client)

    response = record_client.fetch_records('bus_booking', {
        'Fields': [{'Field': {'Name': 'Id'}}],
        'where': [
            {'fieldName': 'origin', 'Operator': 'ExactMatch', 'values': ['Austin']},
            {'fieldName': 'date', 'Operator': 'ExactMatch', 'values': ['2099-03-01']},
        ],
    })

    assert response['data'] == [{'Id': 1}]
    assert response['total'] == 1


def test_fetch_records_pages_results_and_reports_total(record_client) -> None:
    _seed_bus_bookings(record_client)

    response = record_client.fetch_records('bus_booking', {
        'Fields': [{'Field': {'Name': 'Id'}}],
        'pagingInfo': {'limit': 1, 'offset': 1},
    })

    assert response['data'] == [{'Id': 2}]
    assert response['total'] == 3


def test_update_record_changes_only_supplied_fields(record_client) -> None:
    _seed_bus_bookings(record_client)

    response = record_client.update_record('bus_booking', {
        'records': [{'Id': 2, 'passenger_name': 'Grace Hopper', 'time': '10:00'}],
    })

    data = response['results'][0]['data']
    assert response['success'] is True
    assert data['passenger_name'] == 'Grace Hopper'
    assert data['time'] == '10:00'
    assert data['destination'] == 'Houston'


def test_update_record_reports_missing_record(record_client) -> None:
    response = record_client.update_record('train_booking', {'records': [{'Id': 42, 'time': '10:00'}]})

    assert response['success'] is False
    assert response['results'] == [{'success': False, 'message': 'Record not found.'}]


def test_delete_record_removes_record_and_reports_missing_ids(record_client) -> None:
    _seed_bus_bookings(record_client)

    response = record_client.delete_record('bus_booking', {'RecordIds': [1, 99]})

    assert response['success'] is False
    assert response['results'] == [{'success': True}, {'success': False, 'message': 'Record not found.'}]
    remaining = record_client.fetch_records('bus_booking', {'Fields': [{'Field': {'Name': 'Id'}}]})
    assert remaining['data'] == [{'Id': 2}, {'Id': 3}]


@pytest.mark.parametrize(
    ('call', 'message'),
    [
        (lambda client: client.fetch_records('hotel_booking', {}), "Unknown table 'hotel_booking'."),
        (
            lambda client: client.fetch_records('bus_booking', {'Fields': [{'Field': {'Name': 'price'}}]}),
            'Unknown field(s) for bus_booking: price.',
        ),
        (
            lambda client: client.fetch_records(
                'bus_booking',
                {'where': [{'fieldName': 'origin', 'Operator': 'Contains', 'values': ['Aus']}]},
            ),
            "Unsupported operator 'Contains'.",
        ),
        (
            lambda client: client.create_record('bus_booking', {'records': [{'Id': 5, 'origin': 'Austin'}]}),
            'Id is assigned by the record store.',
        ),
        (lambda client: client.delete_record('bus_booking', {'RecordIds': []}), 'delete_record needs at least one record id.'),
        (
            lambda client: client.fetch_records('bus_booking', {'Fields': [{'Name': 'origin'}]}),
            "Every Fields entry needs the form {'Field': {'Name': ...}}.",
        ),
        (
            lambda client: client.fetch_records('bus_booking', {'Fields': 'origin'}),
            'Fields must be a list of field entries.',
        ),
        (
            lambda client: client.fetch_records('bus_booking', {'where': 'origin = Austin'}),
            'where must be a list of conditions.',
        ),
        (
            lambda client: client.fetch_records('bus_booking', {'where': {'fieldName': 'origin', 'values': ['Austin']}}),
            'where must be a list of conditions.',
        ),
        (
            lambda client: client.fetch_records('bus_booking', {'where': ['origin']}),
            'Every where condition must be an object.',
        ),
        (
            lambda client: client.fetch_records('bus_booking', {'pagingInfo': {'limit': 'ten'}}),
            'pagingInfo limit and offset must be integers.',
        ),
        (
            lambda client: client.fetch_records('bus_booking', {'pagingInfo': {'limit': 10, 'offset': -1}}),
            'pagingInfo needs a positive limit and a non-negative offset.',
        ),
        (lambda client: client.delete_record('bus_booking', {'RecordIds': 5}), 'RecordIds must be a list.'),
        (lambda client: client.update_record('bus_booking', {'records': {'Id': 1}}), 'records must be a list.'),
        (lambda client: client.create_record('bus_booking', {'records': ['Austin']}), 'Every record must be an object.'),
    ],
)
def test_malformed_requests_raise_record_client_error(record_client, call, message: str) -> None:
    with pytest.raises(RecordClientError) as exception_info:
        call(record_client)

    assert str(exception_info.value) == message
