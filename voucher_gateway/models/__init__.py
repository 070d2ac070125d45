# Models Package
# MVC Model Layer - Pydantic Models

from .voucher import *
from .activity_log import *
from .draft import *
from .response import *
from .health import *
