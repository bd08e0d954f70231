"""Reserved names of the deployment rule set schema.

See the DTD at
https://docs.oracle.com/javase/8/docs/technotes/guides/deploy/deployment_rules.html
"""

# Elements
RULE_SET_ELEMENT = "ruleset"
RULE_ELEMENT = "rule"
ID_ELEMENT = "id"
ACTION_ELEMENT = "action"

# <id> attributes
HASH_ATTRIBUTE = "hash"
LOCATION_ATTRIBUTE = "location"

# <action> attributes
PERMISSION_ATTRIBUTE = "permission"
VERSION_ATTRIBUTE = "version"

# Slot labels used in structural diagnostics
ID_SLOT = ID_ELEMENT
ACTION_SLOT = ACTION_ELEMENT

RULE_SET_FILE_NAME = "ruleset.xml"
CONFIG_FILE_NAME = ".deployrules.json"
