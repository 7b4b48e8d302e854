from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Per-IP limits on the code and login endpoints; bound in main.create_app.
limiter = Limiter(key_func=get_remote_address)
