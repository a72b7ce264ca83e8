from flask_restx import Namespace, Resource, fields
from flask import request

from marketplace.models import OrderType, Role
from marketplace.services import order_service
from marketplace.utils import get_current_identity, role_required, token_required
from marketplace.utils.validation import parse_id, require_fields

order_ns = Namespace('orders', description='Order operations', path='/orders')

order_model = order_ns.model('OrderRequest', {
    'productId': fields.Integer(required=True, description='Product to order'),
    'quantity': fields.Integer(description='Quantity, defaults to 1')
})


def format_orders(orders):
    return [order.to_dict(include_product=True) for order in orders]


@order_ns.route('/buyer/order')
class BuyerOrder(Resource):
    @token_required
    @order_ns.expect(order_model)
    @order_ns.doc('create_buyer_order', security='BearerAuth')
    def post(self):
        """Place a buy order"""
        data = request.get_json(silent=True)
        require_fields(data, 'productId', 'quantity')
        order = order_service.create_order(
            get_current_identity().id,
            parse_id(data['productId'], 'productId'),
            data['quantity'],
            OrderType.BUY
        )
        return order.to_dict(), 201


@order_ns.route('/seller/order')
class SellerOrder(Resource):
    @token_required
    @role_required(Role.SELLER)
    @order_ns.expect(order_model)
    @order_ns.doc('create_seller_order', security='BearerAuth')
    def post(self):
        """Place a sell order"""
        data = request.get_json(silent=True)
        require_fields(data, 'productId')
        order = order_service.create_order(
            get_current_identity().id,
            parse_id(data['productId'], 'productId'),
            data.get('quantity'),
            OrderType.SELL
        )
        return order.to_dict(), 201


@order_ns.route('/buyer/orders')
class BuyerOrderList(Resource):
    @token_required
    @order_ns.doc('list_buyer_orders', security='BearerAuth')
    def get(self):
        """Orders where the caller is the buyer"""
        return format_orders(order_service.list_buyer_orders(get_current_identity().id)), 200


@order_ns.route('/seller/orders')
class SellerOrderList(Resource):
    @token_required
    @order_ns.doc('list_seller_orders', security='BearerAuth')
    def get(self):
        """Orders where the caller is the seller"""
        return format_orders(order_service.list_seller_orders(get_current_identity().id)), 200


@order_ns.route('/seller/orders/all')
class AllOrderList(Resource):
    @token_required
    @order_ns.doc('list_all_orders', security='BearerAuth')
    def get(self):
        """Every order in the marketplace"""
        return format_orders(order_service.list_all_orders()), 200
