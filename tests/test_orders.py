import pytest

from marketplace import db
from marketplace.models import Order, Product, Role


def test_buyer_orders_widget(client, buyer, product, auth_header):
    response = client.post('/orders/buyer/order', json={'productId': product.id, 'quantity': 3},
                           headers=auth_header(buyer))
    assert response.status_code == 201
    body = response.get_json()
    assert body['type'] == 'buy'
    assert body['buyerId'] == buyer.id
    assert body['sellerId'] == product.seller_id
    assert body['quantity'] == 3
    assert body['totalPrice'] == pytest.approx(28.5)


def test_full_flow_from_signup(client, admin, auth_header):
    seller = client.post('/auth/signup', json={
        'name': 'Sam', 'email': 's@x.com', 'password': 'pw123456', 'role': 'seller'
    }).get_json()
    buyer = client.post('/auth/signup', json={
        'name': 'Alice', 'email': 'a@x.com', 'password': 'pw123456'
    }).get_json()
    category = client.post('/categories', json={'name': 'Tools', 'slug': 'tools'},
                           headers=auth_header(admin)).get_json()

    response = client.post('/products', json={
        'title': 'Widget', 'description': 'A widget', 'price': 9.5, 'categoryId': category['id']
    }, headers={'Authorization': f"Bearer {seller['token']}"})
    assert response.status_code == 201
    product = response.get_json()

    response = client.post('/orders/buyer/order', json={'productId': product['id'], 'quantity': 3},
                           headers={'Authorization': f"Bearer {buyer['token']}"})
    assert response.status_code == 201
    assert response.get_json()['totalPrice'] == pytest.approx(28.5)


@pytest.mark.parametrize('quantity', [0, -4, 'lots', 2.7, float('inf')])
def test_invalid_quantity_becomes_one(client, buyer, product, auth_header, quantity):
    response = client.post('/orders/buyer/order', json={'productId': product.id, 'quantity': quantity},
                           headers=auth_header(buyer))
    assert response.status_code == 201
    body = response.get_json()
    assert body['quantity'] == 1
    assert body['totalPrice'] == pytest.approx(9.5)


def test_buyer_order_requires_fields(client, buyer, product, auth_header):
    response = client.post('/orders/buyer/order', json={'productId': product.id}, headers=auth_header(buyer))
    assert response.status_code == 400
    response = client.post('/orders/buyer/order', json={'quantity': 2}, headers=auth_header(buyer))
    assert response.status_code == 400


def test_buyer_order_bad_product_id(client, buyer, auth_header):
    response = client.post('/orders/buyer/order', json={'productId': 'abc', 'quantity': 1},
                           headers=auth_header(buyer))
    assert response.status_code == 400


@pytest.mark.parametrize('product_id', [10 ** 30, 1.9, -1, 0, True, [1]])
def test_buyer_order_rejects_out_of_range_product_id(client, buyer, product, auth_header, product_id):
    response = client.post('/orders/buyer/order', json={'productId': product_id, 'quantity': 1},
                           headers=auth_header(buyer))
    assert response.status_code == 400
    assert response.get_json()['message'] == 'productId must be an integer id'


def test_buyer_order_accepts_numeric_string_id(client, buyer, product, auth_header):
    response = client.post('/orders/buyer/order', json={'productId': str(product.id), 'quantity': 1},
                           headers=auth_header(buyer))
    assert response.status_code == 201
    assert response.get_json()['productId'] == product.id


def test_buyer_order_unknown_product(client, buyer, auth_header):
    response = client.post('/orders/buyer/order', json={'productId': 999, 'quantity': 1},
                           headers=auth_header(buyer))
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Product not found'


def test_buyer_order_requires_token(client, product):
    response = client.post('/orders/buyer/order', json={'productId': product.id, 'quantity': 1})
    assert response.status_code == 401


def test_order_for_deleted_user_is_404(client, buyer, product, auth_header):
    headers = auth_header(buyer)
    db.session.delete(buyer)
    db.session.commit()
    response = client.post('/orders/buyer/order', json={'productId': product.id, 'quantity': 1}, headers=headers)
    assert response.status_code == 404
    assert response.get_json()['message'] == 'User not found'


def test_seller_order_swaps_parties(client, make_user, product, auth_header):
    other_seller = make_user('Other', 'other@example.com', Role.SELLER)
    response = client.post('/orders/seller/order', json={'productId': product.id, 'quantity': 2},
                           headers=auth_header(other_seller))
    assert response.status_code == 201
    body = response.get_json()
    assert body['type'] == 'sell'
    assert body['sellerId'] == other_seller.id
    assert body['buyerId'] == product.seller_id
    assert body['totalPrice'] == pytest.approx(19.0)


def test_seller_order_defaults_quantity(client, seller, product, auth_header):
    response = client.post('/orders/seller/order', json={'productId': product.id}, headers=auth_header(seller))
    assert response.status_code == 201
    assert response.get_json()['quantity'] == 1


def test_buyer_cannot_place_seller_order(client, buyer, product, auth_header):
    response = client.post('/orders/seller/order', json={'productId': product.id}, headers=auth_header(buyer))
    assert response.status_code == 403


def _place(client, user, product, auth_header, quantity=1):
    response = client.post('/orders/buyer/order', json={'productId': product.id, 'quantity': quantity},
                           headers=auth_header(user))
    assert response.status_code == 201
    return response.get_json()


def test_order_listings(client, buyer, seller, make_user, category, product, auth_header):
    other_seller = make_user('Other', 'other@example.com', Role.SELLER)
    other_product = Product(title='Gadget', description='A gadget', price=2.0,
                            seller_id=other_seller.id, category_id=category.id)
    db.session.add(other_product)
    db.session.commit()

    first = _place(client, buyer, product, auth_header)
    second = _place(client, buyer, other_product, auth_header, quantity=2)

    response = client.get('/orders/buyer/orders', headers=auth_header(buyer))
    assert response.status_code == 200
    buyer_orders = response.get_json()
    assert {order['id'] for order in buyer_orders} == {first['id'], second['id']}
    assert all(order['product'] for order in buyer_orders)

    response = client.get('/orders/seller/orders', headers=auth_header(seller))
    assert response.status_code == 200
    seller_orders = response.get_json()
    assert [order['id'] for order in seller_orders] == [first['id']]
    assert seller_orders[0]['product']['title'] == 'Widget'

    response = client.get('/orders/seller/orders/all', headers=auth_header(seller))
    assert response.status_code == 200
    assert {order['id'] for order in response.get_json()} == {first['id'], second['id']}


def test_order_listings_require_token(client):
    for path in ('/orders/buyer/orders', '/orders/seller/orders', '/orders/seller/orders/all'):
        assert client.get(path).status_code == 401


def test_total_price_is_fixed_at_creation(client, buyer, product, auth_header):
    created = _place(client, buyer, product, auth_header, quantity=2)
    product.price = 100.0
    db.session.commit()
    order = db.session.get(Order, created['id'])
    assert order.total_price == pytest.approx(19.0)
