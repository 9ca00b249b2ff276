from . import backends
from . import models
from . import wizard
