from datetime import datetime, timezone

from flask_restx import Namespace, Resource

health_ns = Namespace('health', description='Service health', path='/health')


@health_ns.route('')
class Health(Resource):
    def get(self):
        return {'status': 'ok', 'timestamp': datetime.now(timezone.utc).isoformat()}, 200
