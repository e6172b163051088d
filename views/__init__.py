"""
Pages package for the TicketOps console.
Each module exposes a render(ctx: AppContext) function.
"""

from views.dashboard import render as render_dashboard
from views.tickets import render as render_tickets
from views.create_ticket import render as render_create_ticket
from views.rma_records import render as render_rma_records
from views.asset_view import render as render_asset_view
from views.requisitions import render as render_requisitions
from views.users import render as render_users
from views.user_rights import render as render_user_rights
from views.notifications import render as render_notifications
from views.profile import render as render_profile

# Map page display names to their render functions
PAGE_REGISTRY = {
    "Dashboard": render_dashboard,
    "Tickets": render_tickets,
    "Create Ticket": render_create_ticket,
    "RMA Records": render_rma_records,
    "Asset View": render_asset_view,
    "Requisitions": render_requisitions,
    "Users": render_users,
    "User Rights": render_user_rights,
    "Notifications": render_notifications,
    "Profile": render_profile,
}
