"""
Receipt Models

Contains the Receipt and ReceiptItem models. Receipt items are the
source the ingredient price catalog is built from.
"""

from .base import db


class Receipt(db.Model):
    """Purchase receipt with line items."""
    id = db.Column(db.Integer, primary_key=True)
    vendor = db.Column(db.String(200), nullable=False)
    amount = db.Column(db.Float, default=0.0)
    method = db.Column(db.String(50), default='')
    date = db.Column(db.String(20), default='')   # ISO date as entered
    invoice = db.Column(db.String(100), default='')
    items = db.relationship('ReceiptItem', backref='receipt', lazy=True,
                            cascade='all, delete-orphan', order_by='ReceiptItem.position')

    def to_dict(self):
        return {
            'id': self.id,
            'vendor': self.vendor,
            'amount': self.amount,
            'method': self.method or '',
            'date': self.date or '',
            'invoice': self.invoice or '',
            'items': [item.to_dict() for item in self.items],
        }


class ReceiptItem(db.Model):
    """Line 'name: size: price' of a receipt, stored as entered."""
    id = db.Column(db.Integer, primary_key=True)
    receipt_id = db.Column(db.Integer, db.ForeignKey('receipt.id'), nullable=False, index=True)
    position = db.Column(db.Integer, default=0)
    name = db.Column(db.String(200), default='')
    size = db.Column(db.String(100), default='')
    price = db.Column(db.String(20), default='')

    def to_dict(self):
        return {'name': self.name, 'size': self.size, 'price': self.price}
