from flask_restx import Namespace, Resource, fields
from flask import request

from marketplace.models import Role
from marketplace.services import product_service
from marketplace.utils import get_current_identity, role_required, token_required

product_ns = Namespace('products', description='Operations related to products', path='/products')

# Swagger model
product_model = product_ns.model('Product', {
    'title': fields.String(required=True),
    'description': fields.String(required=True),
    'price': fields.Float(required=True),
    'categoryId': fields.Integer(required=True)
})


@product_ns.route('')
class ProductList(Resource):
    def get(self):
        """Get all products with their category"""
        products = product_service.get_all_products()
        return [product.to_dict(include_category=True) for product in products], 200

    @token_required
    @role_required(Role.SELLER)
    @product_ns.expect(product_model)
    @product_ns.doc('create_product', security='BearerAuth')
    def post(self):
        """Create a new product (seller only)"""
        seller = get_current_identity()
        product = product_service.create_product(request.get_json(silent=True), seller.id)
        return product.to_dict(), 201


@product_ns.route('/<int:product_id>')
class ProductResource(Resource):
    @token_required
    @role_required(Role.ADMIN)
    @product_ns.doc('delete_product', security='BearerAuth')
    def delete(self, product_id):
        """Delete a product (admin only)"""
        product_service.delete_product(product_id)
        return '', 204
