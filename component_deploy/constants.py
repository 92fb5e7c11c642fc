"""Global constants for component-deploy"""

import re

APP_NAME = "component-deploy"

# Configuration discovery
ENV_CONFIG_PATH = "COMPONENT_DEPLOY_CONFIG"
DEFAULT_CONFIG_PATH = "/usr/local/etc/component-deploy.yaml"

# Component selection
ALL_COMPONENTS = "ALL"
COMPONENT_SEPARATOR = ","
PLUGIN_PATTERN_RE = re.compile(r"^\[(.+)\]$")
COMMENT_PREFIX = "#"

# Default filesystem layout (application server host)
DEFAULT_WAR_BASE = "/usr/local/tomcat/wars"
DEFAULT_LIST_FILE = "/usr/local/sbin/component_and_plugin_list"
DEFAULT_PLUGIN_DIR_NAME = "deposit_plugins"
DEFAULT_BACKUP_DIR_TEMPLATE = "/var/tmp/deposit_plugins_%Y%m%d%H%M"
DEFAULT_LOG_DIR = "/var/log/deployment"
DEFAULT_CACHE_PATHS = [
    "${war_base}/work/Catalina/localhost/${name}",
    "${war_base}/webapp/${name}",
]

# Pointer layout
PREVIOUS_LINK_SUFFIX = "-previous"
MARKER_SUFFIX = ".current_version"
TEMP_SUFFIX = ".tmp"
SNAPSHOT_SUFFIX = "-SNAPSHOT"

# Branch resolution
DEFAULT_TRUNK_KEYWORD = "trunk"
DEFAULT_TRUNK_NAME = "pala"
DEFAULT_BRANCH_PREFIX = "pala-"

# Build server
DEFAULT_REMOTE_HOST = "javabuild04"
DEFAULT_REMOTE_USER = "root"
DEFAULT_KEY_FILE = "~/.ssh/javabuild_dsa"
DEFAULT_ARCHIVE_ROOT = "/usr/local/hudson/jobs/${branch}/lastStable/archive"
DEFAULT_SOURCE_TEMPLATE = "${name}/target"
DEFAULT_ARTIFACT_EXTENSION = "war"
DEFAULT_PLUGIN_GLOB = "*.jar"
DEFAULT_REMOTE_TIMEOUT = 300  # seconds

# Ownership
DEFAULT_OWNER = "tomcat"
DEFAULT_GROUP = "services"

# Application server restart
DEFAULT_STOP_COMMAND = ["/sbin/service", "tomcat", "stop"]
DEFAULT_PROCESS_PATTERN = "java.*tomcat"
DEFAULT_STOP_GRACE = 5
DEFAULT_KILL_GRACE = 2
DEFAULT_WORK_DIR = "/usr/local/tomcat/work/Catalina/localhost"

# Readiness
DEFAULT_SERVICE_HOST = "127.0.0.1"
DEFAULT_SERVICE_PORT = 8080
DEFAULT_READINESS_TIMEOUT = 420  # 7 minutes
DEFAULT_READINESS_INTERVAL = 5

# Health checks
DEFAULT_HEALTH_COMMAND = [
    "/usr/lib64/nagios/plugins/check_TomcatApplication.sh",
    "-u", "${user}",
    "-p", "${password}",
    "--host", "${host}",
    "-P", "${port}",
    "-a", "${name}",
]
DEFAULT_HEALTH_USER = "tadmin"
DEFAULT_HEALTH_HOST = "localhost"
DEFAULT_HEALTH_TIMEOUT = 60
DEFAULT_CRITICAL_MARKER = "CRITICAL"
DEFAULT_STATUS_FILE = "/var/tmp/tomcat_status"
DEFAULT_SUMMARY_FILE = "/var/tmp/tomcat_summary.log"

# Reporting
DEFAULT_REPORT_PATH = "/tmp/deployment_report_final.html"
DEFAULT_MAIL_FROM = "deployment@localhost"
DEFAULT_SUBJECT_TEMPLATE = "Deployment Report | Branch: {BRANCH} | Host: {HOST} | {DATE}"
DEFAULT_SENDMAIL_COMMAND = ["/usr/sbin/sendmail", "-t"]
DEFAULT_MAIL_TIMEOUT = 60  # seconds

# Logging
LOG_FORMAT = "%(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_FILE_TEMPLATE = "component_deploy_%d%m%y%H%M.log"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "CD001"
    ARTIFACT_SOURCE_ERROR = "CD002"
    PRECONDITION_FAILED = "CD003"
    VERSION_STORE_ERROR = "CD004"
    HEALTH_CHECK_ERROR = "CD005"
    NO_PREVIOUS_VERSION = "CD006"


# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
EMOJI_LINK = "🔗"

# Messages templates
MSG_LINK_UPDATED = f"{EMOJI_LINK} Link updated: {{link}} {EMOJI_ARROW} {{target}}"
MSG_DEPLOY_SUCCESS = f"{EMOJI_SUCCESS} Deployed: {{component}} {EMOJI_ARROW} {{version}}"
MSG_ALREADY_CURRENT = "{component} already on version {version}, skipping"
MSG_ROLLED_BACK = f"{EMOJI_SUCCESS} Rolled back {{component}} from {{old_version}} to {{new_version}}"
