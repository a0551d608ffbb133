# /psyassist/db/base.py

# Central registry for all SQLAlchemy models. Importing this module guarantees
# that `Base.metadata` knows every table before `create_all` runs.

from .base_class import Base

from .models.child_models import Child
from .models.assessment_models import Assessment, Report
