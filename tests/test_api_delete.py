"""Tests for DELETE /api/delete."""

import pytest


def test_delete_material_refreshes_catalog(client, data_root):
    assert client.get('/Brand/Acme/PLA/PolyLite').status_code == 200

    resp = client.delete('/api/delete', json={'type': 'material', 'name': 'PLA', 'brandName': 'Acme'})

    assert resp.status_code == 200
    assert resp.get_json() == {'success': True, 'message': 'material "PLA" deleted successfully'}
    assert not (data_root / "Acme" / "PLA").exists()

    # The response is only sent after the new snapshot is live
    page = client.get('/Brand/Acme/PLA/PolyLite')
    assert page.status_code == 404
    assert b"Material not found" in page.data


def test_delete_store(client, store_root):
    resp = client.delete('/api/delete', json={'type': 'store', 'name': 'Printed Solid'})

    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'store "Printed Solid" deleted successfully'
    assert not (store_root / "Printed Solid").exists()
    assert client.get('/Store/Printed Solid').status_code == 404


def test_delete_instance(client, data_root):
    resp = client.delete('/api/delete', json={
        'type': 'instance', 'name': 'Galaxy Black', 'brandName': 'Acme',
        'materialName': 'PLA', 'filamentName': 'PolyLite',
    })

    assert resp.status_code == 200
    assert not (data_root / "Acme" / "PLA" / "PolyLite" / "Galaxy Black").exists()
    assert (data_root / "Acme" / "PLA" / "PolyLite" / "filament.json").exists()


def test_missing_ancestor_leaves_filesystem_untouched(client, data_root):
    resp = client.delete('/api/delete', json={'type': 'material', 'name': 'PLA'})

    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Brand name is required for material deletion'}
    assert (data_root / "Acme" / "PLA").is_dir()


def test_missing_on_disk(client):
    resp = client.delete('/api/delete', json={'type': 'brand', 'name': 'Nope'})

    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'brand "Nope" not found'}


def test_invalid_type(client):
    resp = client.delete('/api/delete', json={'type': 'variant', 'name': 'Red'})

    assert resp.status_code == 400
    assert resp.get_json() == {
        'error': 'Invalid type. Must be brand, store, material, filament, or instance',
    }


@pytest.mark.parametrize("payload", [
    {'type': 'brand', 'name': '../stores'},
    {'type': 'instance', 'name': '../../etc', 'brandName': 'B',
     'materialName': 'M', 'filamentName': 'F'},
])
def test_traversal_is_rejected(client, tmp_path, payload):
    resp = client.delete('/api/delete', json=payload)

    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid path'}
    assert (tmp_path / "stores" / "Printed Solid").is_dir()


@pytest.mark.parametrize("body", [b"not json", b"[1, 2]"])
def test_invalid_body(client, body):
    resp = client.delete('/api/delete', data=body, content_type='application/json')

    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid request body'}


def test_unexpected_failure_is_500(client, monkeypatch, data_root):
    def fail(path):
        raise PermissionError("denied")

    monkeypatch.setattr("ofd_webui.routes.api.delete_tree", fail)

    resp = client.delete('/api/delete', json={'type': 'brand', 'name': 'Acme'})

    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'Internal server error'}
    assert (data_root / "Acme").is_dir()


def test_responses_are_not_cacheable(client):
    resp = client.delete('/api/delete', json={'type': 'brand', 'name': 'Nope'})

    assert 'no-store' in resp.headers['Cache-Control']
