from datetime import datetime

from marketplace import db


class Product(db.Model):
    __tablename__ = 'products'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Float, nullable=False)
    seller_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id', ondelete='RESTRICT'), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    seller = db.relationship('User', back_populates='products')
    category = db.relationship('Category', back_populates='products')

    def __repr__(self):
        return f'<Product {self.title}>'

    def to_dict(self, include_category=False):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'price': float(self.price) if self.price is not None else None,
            'sellerId': self.seller_id,
            'categoryId': self.category_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
        if include_category:
            data['category'] = self.category.to_dict() if self.category else None
        return data
