from flask_restx import Namespace, Resource, fields
from flask import request

from marketplace.models import Role
from marketplace.services import category_service
from marketplace.utils import role_required, token_required

category_ns = Namespace('categories', description='Operations related to product categories', path='/categories')

# Swagger model
category_model = category_ns.model('Category', {
    'name': fields.String(required=True, description='Category name'),
    'slug': fields.String(required=True, description='Unique URL slug')
})


@category_ns.route('')
class CategoryList(Resource):
    @token_required
    @category_ns.doc(security='BearerAuth')
    def get(self):
        """Get all categories"""
        return [category.to_dict() for category in category_service.get_all_categories()], 200

    @token_required
    @role_required(Role.ADMIN)
    @category_ns.expect(category_model)
    @category_ns.doc(security='BearerAuth')
    def post(self):
        """Create a new category (admin only)"""
        category = category_service.create_category(request.get_json(silent=True))
        return category.to_dict(), 201
