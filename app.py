import logging
import os
from cypher import create_app

app = create_app(os.getenv('FLASK_ENV', 'default'))

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)

if __name__ == "__main__":
    app.run(host='0.0.0.0', port=app.config['PORT'])
