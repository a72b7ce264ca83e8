import enum
from datetime import datetime

from marketplace import db


class Role(enum.Enum):
    BUYER = 'buyer'
    SELLER = 'seller'
    ADMIN = 'admin'


def enum_values(enum_class):
    return [member.value for member in enum_class]


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(Role, values_callable=enum_values, name='user_role'),
                     nullable=False, default=Role.BUYER)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    products = db.relationship('Product', back_populates='seller', lazy=True,
                               cascade='all, delete-orphan', passive_deletes=True)
    buyer_orders = db.relationship('Order', back_populates='buyer', lazy=True,
                                   foreign_keys='Order.buyer_id', passive_deletes=True)
    seller_orders = db.relationship('Order', back_populates='seller', lazy=True,
                                    foreign_keys='Order.seller_id', passive_deletes=True)

    def __repr__(self):
        return f'<User {self.email} ({self.role.value})>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value
        }
