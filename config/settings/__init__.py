import os

# DJANGO_ENV: prod(기본) / dev / test
env = os.getenv("DJANGO_ENV", "prod")
if env == "dev":
    from .dev import *
elif env == "test":
    from .test import *
else:
    from .prod import *
