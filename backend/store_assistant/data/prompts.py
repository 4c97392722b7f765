"""Canned assistant copy: greetings, error messages and stock quick replies.

Follow-up message templates use ``str.format`` placeholders filled from the
action proposal's ``params``:
- {customerName} - Customer's display name
- {customerId} - Backend customer identifier
"""

WELCOME_MESSAGE = (
    "Hello! I'm your AI store management assistant. I can help you with inventory "
    "management, sales analysis, customer queries, supplier management, and much more.\n\n"
    "📄 You can upload documents (images/PDFs) directly in this chat. I'll analyze your "
    "bills, prescriptions, or any pharmacy documents and help you with whatever you need.\n\n"
    "What would you like to know about your store today?"
)

WELCOME_SUGGESTIONS = [
    "Show me today's sales",
    "Check low stock medicines",
    "Find a customer",
    "Create purchase order",
    "Show dashboard overview",
]

CLEARED_MESSAGE = "Conversation cleared! How can I help you with your store management today?"

CLEARED_SUGGESTIONS = [
    "Show me today's sales",
    "Check inventory status",
    "View customer analytics",
    "Help me with reports",
]

QUICK_START_QUERIES = [
    {
        "title": "Sales Analytics",
        "description": "View sales reports and performance metrics",
        "query": "Show me today's sales performance",
    },
    {
        "title": "Inventory Status",
        "description": "Check stock levels and low inventory alerts",
        "query": "Show me low stock medicines",
    },
    {
        "title": "Customer Management",
        "description": "Find customers and view purchase history",
        "query": "Show me top customers this month",
    },
    {
        "title": "Purchase Orders",
        "description": "Create and manage purchase orders",
        "query": "Show pending purchase orders",
    },
]

# ── Dispatch failures ────────────────────────────────────────────────

RETRY_MESSAGE = "I'm having trouble connecting right now. Please try again."

ESCALATED_ERROR_MESSAGE = (
    "I'm experiencing technical difficulties. "
    "Please check your connection and try again later."
)

RETRY_SUGGESTIONS = ["Try again", "Show me dashboard", "Help"]

# ── Document uploads ─────────────────────────────────────────────────

ATTACHMENT_MARKER = "📄 Uploaded document: {name}"

ANALYSIS_MESSAGE = (
    'I\'ve analyzed your document "{name}". {summary}\n\n'
    "What would you like me to do with this document? I can:\n"
    "• Extract specific information\n"
    "• Create purchase orders\n"
    "• Add medicines to inventory\n"
    "• Generate reports\n"
    "• Answer questions about the content"
)

ANALYSIS_FALLBACK_SUGGESTIONS = [
    "Extract all medicine names",
    "Create purchase order",
    "What's the total amount?",
    "Add to inventory",
]

UPLOAD_FAILED_MESSAGE = 'Failed to upload document "{name}". Please try again.'

# ── Follow-up actions ────────────────────────────────────────────────

ACTION_MESSAGES = {
    "add_customer_details": "Add more details for customer {customerName}",
    "edit_customer": "Edit customer {customerName}",
    "add_customer": "Add a new customer",
    "view_customers": "Show me all customers",
    "confirm_delete": "Confirm delete customer ID {customerId}",
    "cancel_delete": "Cancel the deletion request",
    "search_customers": "Search for customers",
    "customer_analytics": "Show customer analytics",
}

DELETION_WARNING = (
    "Customer deletion is permanent and cannot be undone. "
    "Please review the customer details carefully before confirming."
)
