import pytest

from tests.conftest import ADMIN_EMAIL, USER_EMAIL
from tests.utils.request_utils import make_request, token_for

MENU_ITEM = {
    'name': 'Scrambled eggs',
    'price': 9.99,
    'recipe': 'Eggs especially for breakfast',
    'category': 'breakfast',
    'image': 'https://images.restaurant.com/eggs.png'
}


@pytest.fixture
def menu_item_id(store):
    return store.menu.insert_one({'id': 'burger-id', 'name': 'Burger', 'price': 18.5, 'category': 'dinner'})['insertedId']


def test_get_menu_is_public(client, menu_item_id):
    response = make_request(client, endpoint='/menu')

    assert response.status_code == 200
    assert [item['name'] for item in response.json_body] == ['Burger']


def test_get_menu_item(client, menu_item_id):
    response = make_request(client, endpoint=f'/menu/{menu_item_id}')

    assert response.json_body['id'] == menu_item_id
    assert response.json_body['price'] == 18.5


def test_get_missing_menu_item(client):
    response = make_request(client, endpoint='/menu/missing-id')

    assert response.status_code == 200
    assert response.json_body is None


def test_create_then_get_menu_item(client):
    response_create = make_request(client, endpoint='/menu', method='POST', json_body=MENU_ITEM,
                                   token=token_for(ADMIN_EMAIL))
    assert response_create.status_code == 200
    menu_item_id = response_create.json_body['insertedId']

    response_get = make_request(client, endpoint=f'/menu/{menu_item_id}')

    assert response_get.json_body == {**MENU_ITEM, 'id': menu_item_id}


def test_create_menu_item_requires_admin(client, store):
    response = make_request(client, endpoint='/menu', method='POST', json_body=MENU_ITEM, token=token_for(USER_EMAIL))

    assert response.status_code == 403
    assert store.menu.count() == 0


def test_upsert_inserts_missing_item(client, store):
    response = make_request(client, endpoint='/menu/new-id', method='POST', json_body=MENU_ITEM,
                            token=token_for(ADMIN_EMAIL))

    assert response.json_body['upsertedId'] == 'new-id'
    assert response.json_body['upsertedCount'] == 1
    assert store.menu.find_one({'id': 'new-id'})['name'] == 'Scrambled eggs'


def test_upsert_replaces_listed_fields_only(client, store, menu_item_id):
    response = make_request(client, endpoint=f'/menu/{menu_item_id}', method='POST',
                            json_body={'price': 20, 'calories': 900}, token=token_for(ADMIN_EMAIL))

    assert response.json_body['matchedCount'] == 1
    assert response.json_body['modifiedCount'] == 1
    menu_item = store.menu.find_one({'id': menu_item_id})
    assert menu_item['price'] == 20
    assert menu_item['name'] == 'Burger'
    assert 'calories' not in menu_item


def test_upsert_requires_token(client, menu_item_id):
    response = make_request(client, endpoint=f'/menu/{menu_item_id}', method='POST', json_body={'price': 1})

    assert response.status_code == 401


def test_delete_menu_item(client, store, menu_item_id):
    response = make_request(client, endpoint=f'/menu/{menu_item_id}', method='DELETE', token=token_for(ADMIN_EMAIL))

    assert response.json_body['deletedCount'] == 1
    assert store.menu.count() == 0


def test_delete_menu_item_requires_admin(client, store, menu_item_id):
    response = make_request(client, endpoint=f'/menu/{menu_item_id}', method='DELETE', token=token_for(USER_EMAIL))

    assert response.status_code == 403
    assert response.json_body == {'error': True, 'message': 'forbidden access'}
    assert store.menu.count() == 1


def test_get_reviews_is_public(client, store):
    store.reviews.insert_one({'name': 'Jane', 'details': 'Great burger', 'rating': 5})

    response = make_request(client, endpoint='/reviews')

    assert response.status_code == 200
    assert response.json_body[0]['details'] == 'Great burger'


def test_upsert_sets_null_field(client, store, menu_item_id):
    store.menu.update_one({'id': menu_item_id}, {'$set': {'image': 'https://images.restaurant.com/burger.png'}})

    response = make_request(client, endpoint=f'/menu/{menu_item_id}', method='POST',
                            json_body={'image': None}, token=token_for(ADMIN_EMAIL))

    assert response.status_code == 200
    assert response.json_body['modifiedCount'] == 1
    assert store.menu.find_one({'id': menu_item_id})['image'] is None
