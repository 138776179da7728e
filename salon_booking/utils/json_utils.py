import json
from datetime import date, time
from decimal import Decimal


class DecimalEncoder(json.JSONEncoder):
    """
    Custom JSON encoder that can handle Decimal objects
    Used for properly serializing money values and appointment dates/times
    """
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, (date, time)):
            return obj.isoformat()
        return super(DecimalEncoder, self).default(obj)
