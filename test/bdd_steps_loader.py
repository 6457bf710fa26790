"""
BDD Steps Import Module

Consolidates all Gherkin step definitions (Given/When/Then) so pytest-bdd
finds them from any feature file.
"""

from test.service.box_office.integration.steps.given import *  # noqa: E402, F403
from test.service.box_office.integration.steps.then import *  # noqa: E402, F403
from test.service.box_office.integration.steps.when import *  # noqa: E402, F403
