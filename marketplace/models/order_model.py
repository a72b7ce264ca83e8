import enum
from datetime import datetime

from marketplace import db
from marketplace.models.user_model import enum_values


class OrderType(enum.Enum):
    BUY = 'buy'
    SELL = 'sell'


class Order(db.Model):
    """A purchase fact. Orders are written once and never updated."""
    __tablename__ = 'orders'
    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(OrderType, values_callable=enum_values, name='order_type'), nullable=False)
    buyer_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    seller_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='RESTRICT'), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    total_price = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    buyer = db.relationship('User', back_populates='buyer_orders', foreign_keys=[buyer_id])
    seller = db.relationship('User', back_populates='seller_orders', foreign_keys=[seller_id])
    product = db.relationship('Product', backref=db.backref('orders', lazy=True, passive_deletes=True))

    def __repr__(self):
        return f'<Order {self.id} {self.type.value} by User {self.buyer_id}>'

    def to_dict(self, include_product=False):
        data = {
            'id': self.id,
            'type': self.type.value,
            'buyerId': self.buyer_id,
            'sellerId': self.seller_id,
            'productId': self.product_id,
            'quantity': self.quantity,
            'totalPrice': float(self.total_price) if self.total_price is not None else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
        if include_product:
            data['product'] = self.product.to_dict() if self.product else None
        return data
