import pytest


ORDER_HISTORY_HEADER = (
    'Website,Order ID,Order Date,Purchase Order Number,Currency,Unit Price,Total Owed,'
    'Product Name,Order Status,Shipment Status,Carrier Name & Tracking Number'
)


@pytest.fixture
def sample_records():
    return [
        {
            'orderDate': '2023-01-15',
            'productName': 'Wireless Mouse',
            'totalOwed': '25.00',
            'orderStatus': 'Closed',
            'shipmentStatus': 'Shipped',
            'trackingInfo': 'UPS(1Z999)',
        },
        {
            'orderDate': '2023-01-20',
            'productName': 'Coffee Beans',
            'totalOwed': '15.50',
            'orderStatus': 'Closed',
            'shipmentStatus': 'Shipped',
            'trackingInfo': 'AMZN_US(TBA123)',
        },
        {
            'orderDate': '2023-02-01',
            'productName': 'Laptop Charger',
            'totalOwed': '45.00',
            'orderStatus': 'Closed',
            'shipmentStatus': 'Shipped',
            'trackingInfo': 'USPS(9400)',
        },
    ]


@pytest.fixture
def order_history_csv(tmp_path):
    """Order history export with the three sample orders"""
    path = tmp_path / 'Retail.OrderHistory.1.csv'
    lines = [
        ORDER_HISTORY_HEADER,
        'Amazon.com,111-1,2023-01-15T10:21:05Z,Not Applicable,USD,25.00,25.00,'
        'Wireless Mouse,Closed,Shipped,UPS(1Z999)',
        'Amazon.com,111-2,2023-01-20T08:00:00Z,Not Applicable,USD,15.50,15.50,'
        'Coffee Beans,Closed,Shipped,AMZN_US(TBA123)',
        'Amazon.com,111-3,2023-02-01T19:45:00Z,Not Applicable,USD,45.00,45.00,'
        '"Laptop Charger, 65W",Closed,Shipped,USPS(9400)',
    ]
    path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    return path
