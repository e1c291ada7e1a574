# models_bootstrap.py
from user import models as _user_models
from shift import models as _shift_models
from swaprequest import models as _swaprequest_models
from interest import models as _interest_models
