# Identifies this tool to PagerDuty (shown in the incident timeline)
CLIENT_NAME = 'pd-trigger'
CLIENT_URL = 'https://github.com/rollcat/pd-trigger'

# Legacy config file, looked up directly in $HOME
HOME_CONFIG_NAME = '.pd.yml'

# Config file name under each XDG config directory
CONFIG_NAME = 'pagerduty.yml'

# XDG base directory variables (and their defaults)
HOME_ENV_VAR = 'HOME'
XDG_CONFIG_HOME_ENV_VAR = 'XDG_CONFIG_HOME'
XDG_CONFIG_DIRS_ENV_VAR = 'XDG_CONFIG_DIRS'
DEFAULT_XDG_CONFIG_DIRS = '/etc/xdg'

# Where to look when the service itself misbehaves
STATUS_URL = 'https://status.pagerduty.com'
ISSUES_URL = 'https://github.com/rollcat/pd-trigger/issues'

# Process exit codes
EXIT_OK = 0
EXIT_SUBMISSION_FAILED = 1
EXIT_USAGE = 2
