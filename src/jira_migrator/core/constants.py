# Source (Jira export) column names.
ISSUE_KEY = "Issue key"
SUMMARY = "Summary"
ASSIGNEE = "Assignee"
REPORTER = "Reporter"
PRIORITY = "Priority"
STATUS = "Status"
CREATED = "Created"
UPDATED = "Updated"
DESCRIPTION = "Description"
ENVIRONMENT = "Environment"

# Target (Azure DevOps import) column order.
OUTPUT_COLUMNS = [
    "Work Item Type",
    "Title",
    "Assigned To",
    "Created By",
    "Priority",
    "State",
    "Created Date",
    "Changed Date",
    "Description",
]

# Placeholders keep every description section present even when data is missing.
NO_DESCRIPTION = "No description available."
NO_ENVIRONMENT = "Not Provided"
NO_ATTACHMENTS = "No Attachments"

JIRA_LINK_LABEL = "View in Jira"
DEFAULT_WORK_ITEM_TYPE = "Bug"
DEFAULT_ATTACHMENT_HEADER = "attachment"

# Descending: 1 is the most urgent Azure DevOps priority.
DEFAULT_PRIORITY_MAPPING = {
    "Lowest": "4",
    "Low": "4",
    "Medium": "3",
    "High": "2",
    "Highest": "1",
}
DEFAULT_PRIORITY_LABEL = "Medium"
