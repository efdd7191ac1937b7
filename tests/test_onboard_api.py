def test_accepts_complete_submission(client):
    body = {
        'fullName': 'Jane Doe',
        'email': 'jane@acme.com',
        'companyName': 'Acme Inc',
        'services': ['UI/UX'],
        'projectStartDate': '2099-01-15',
        'acceptTerms': True,
    }
    response = client.post('/api/onboard', json=body)

    assert response.status_code == 200
    assert response.get_json() == {'message': 'OK', 'receivedData': body}
    assert response.headers['Access-Control-Allow-Origin'] == '*'


def test_rejects_missing_required_fields(client):
    response = client.post('/api/onboard', json={'fullName': 'Jane Doe', 'email': '  '})

    assert response.status_code == 400
    assert response.get_json() == {'message': 'Missing required fields'}
    assert response.headers['Access-Control-Allow-Origin'] == '*'


def test_rejects_non_json_body(client):
    response = client.post('/api/onboard', data='fullName=Jane', content_type='text/plain')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Missing required fields'


def test_preflight(client):
    response = client.open('/api/onboard', method='OPTIONS')
    assert response.status_code == 204
    assert 'POST' in response.headers['Access-Control-Allow-Methods']
    assert response.headers['Access-Control-Allow-Origin'] == '*'
