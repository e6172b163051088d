"""
CSS styles for the TicketOps console.
Pure string data, no runtime dependencies.
"""


def get_anti_flicker_css():
    """CSS that hides all UI until auth is resolved. Runs first to prevent flash."""
    return """
<style>
.stApp { opacity: 0 !important; }

[data-testid="stSidebar"],
[data-testid="stSidebarNav"],
section[data-testid="stSidebar"] {
    display: none !important;
}
</style>
"""


def get_login_css():
    """Sign-in page CSS: centered white card on a light background, no sidebar."""
    return """
    <style>
    #MainMenu, footer, header, [data-testid="stToolbar"], [data-testid="stDecoration"],
    [data-testid="stSidebar"], [data-testid="stSidebarNav"], section[data-testid="stSidebar"],
    [data-testid="collapsedControl"] {
        display: none !important;
        visibility: hidden !important;
    }

    .stApp {
        opacity: 1 !important;
        background: #f5f5f5 !important;
        min-height: 100vh;
    }

    [data-testid="stAppViewContainer"],
    [data-testid="stMain"] {
        margin-left: 0 !important;
        padding-left: 0 !important;
        width: 100% !important;
    }

    /* ============ BRAND SECTION ============ */
    .login-brand {
        text-align: center;
        margin-bottom: 1.25rem;
        min-height: 64px;
    }

    .login-brand-title {
        color: #111827;
        font-size: 1.75rem;
        font-weight: 800;
        letter-spacing: -0.02em;
        margin: 0 0 0.25rem 0;
    }

    .login-brand-tagline {
        color: #6b7280;
        font-size: 0.875rem;
        margin: 0;
    }

    /* ============ CARD ============ */
    .login-card-header {
        text-align: center;
        padding: 0 0 1.25rem 0;
    }

    .login-card-header h2 {
        color: #111827;
        font-size: 1.125rem;
        font-weight: 700;
        margin: 0;
        letter-spacing: 0.05em;
    }

    [data-testid="stForm"] {
        background: #ffffff !important;
        border: none !important;
        border-radius: 8px !important;
        padding: 2rem !important;
        margin: 0 auto !important;
        max-width: 380px !important;
        box-shadow: 0 4px 20px rgba(0, 0, 0, 0.1) !important;
    }

    [data-testid="InputInstructions"] {
        display: none !important;
    }

    .stTextInput > label {
        color: #374151 !important;
        font-size: 0.875rem !important;
        font-weight: 600 !important;
    }

    .stTextInput [data-baseweb="base-input"] {
        background: #ffffff !important;
        border: 1px solid #d1d5db !important;
        border-radius: 6px !important;
    }

    .stTextInput [data-baseweb="base-input"]:focus-within {
        border-color: #f97316 !important;
    }

    [data-testid="stFormSubmitButton"] > button {
        background: #f97316 !important;
        color: #ffffff !important;
        border: none !important;
        border-radius: 6px !important;
        padding: 0.875rem 1.5rem !important;
        font-weight: 600 !important;
        margin-top: 1rem !important;
    }

    [data-testid="stFormSubmitButton"] > button:hover {
        background: #ea580c !important;
    }

    [data-testid="stFormSubmitButton"] > button:disabled {
        background: #d1d5db !important;
    }

    .session-warning {
        background: #fffbeb;
        border: 1px solid #fde68a;
        border-radius: 6px;
        padding: 0.625rem 1rem;
        margin-bottom: 1rem;
        text-align: center;
    }

    .session-warning p {
        color: #b45309;
        font-size: 0.85rem;
        margin: 0;
    }

    @media (max-width: 480px) {
        [data-testid="stForm"] {
            max-width: 100% !important;
            border-radius: 0 !important;
        }
    }
    </style>
"""


def get_dashboard_css():
    """Design system CSS for the authenticated console."""
    return """
<style>
    .stApp { opacity: 1 !important; }

    [data-testid="stSidebar"],
    [data-testid="stSidebarNav"],
    section[data-testid="stSidebar"] {
        display: flex !important;
        visibility: visible !important;
    }

    :root {
        --color-text-primary: #1e293b;
        --color-text-secondary: #475569;
        --color-text-tertiary: #64748b;
        --color-brand-primary: #f97316;
        --color-brand-hover: #ea580c;
        --color-border-light: #e2e8f0;
        --color-sidebar-bg: #1a2332;
        --color-sidebar-hover: #232f42;
        --color-sidebar-active: rgba(249, 115, 22, 0.15);
        --radius-md: 6px;
        --radius-lg: 8px;
        --shadow-sm: 0 1px 3px rgba(15, 23, 42, 0.08);
        --font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
    }

    .main .block-container {
        font-family: var(--font-family) !important;
        color: var(--color-text-secondary);
    }

    /* ===== PAGE HEADERS ===== */
    .page-header-title {
        font-size: 1.5rem !important;
        font-weight: 700 !important;
        color: var(--color-text-primary) !important;
        margin: 0 !important;
    }

    .page-header-subtitle {
        color: var(--color-text-tertiary);
        font-size: 0.875rem;
        margin: 0.25rem 0 1rem 0;
    }

    .section-title {
        font-size: 0.6875rem !important;
        font-weight: 600 !important;
        color: var(--color-text-tertiary) !important;
        text-transform: uppercase !important;
        letter-spacing: 0.05em !important;
        display: flex !important;
        align-items: center !important;
        gap: 0.5rem !important;
        margin: 1.5rem 0 1rem 0 !important;
    }

    .section-title-icon {
        width: 6px;
        height: 6px;
        background: var(--color-brand-primary);
        border-radius: 9999px;
    }

    /* ===== METRIC CARDS ===== */
    .metric-card {
        background: #ffffff;
        border: 1px solid var(--color-border-light);
        border-left: 4px solid var(--accent, #3b82f6);
        border-radius: 12px;
        padding: 16px 20px;
        box-shadow: var(--shadow-sm);
    }

    .metric-card .metric-label {
        color: var(--color-text-tertiary);
        font-size: 0.75rem;
        font-weight: 600;
        text-transform: uppercase;
        letter-spacing: 0.025em;
    }

    .metric-card .metric-value {
        color: var(--color-text-primary);
        font-size: 2rem;
        font-weight: 700;
        line-height: 1.1;
        margin-top: 4px;
    }

    .metric-card .metric-hint {
        color: var(--color-text-tertiary);
        font-size: 0.75rem;
        margin-top: 4px;
    }

    /* ===== RECORD CARDS (RMA, requisitions) ===== */
    .record-card {
        background: #ffffff;
        border: 1px solid var(--color-border-light);
        border-radius: var(--radius-lg);
        padding: 14px 18px;
        margin-bottom: 10px;
    }

    .record-card .record-title {
        color: var(--color-text-primary);
        font-weight: 600;
        font-size: 0.95rem;
    }

    .record-card .record-meta {
        color: var(--color-text-tertiary);
        font-size: 0.8rem;
    }

    .record-card.unread {
        border-left: 3px solid var(--color-brand-primary);
        background: #f8fafc;
    }

    .record-card .record-body {
        color: var(--color-text-secondary);
        font-size: 0.85rem;
        margin-top: 6px;
    }

    .timeline {
        display: flex;
        flex-wrap: wrap;
        gap: 6px;
        margin-top: 10px;
    }

    .timeline-step {
        font-size: 0.75rem;
        color: var(--color-text-tertiary);
        padding: 2px 8px;
        border-radius: 4px;
        background: #f8fafc;
        border: 1px solid var(--color-border-light);
    }

    .timeline-step.latest {
        border-color: var(--color-brand-primary);
        color: var(--color-brand-hover);
        font-weight: 600;
    }

    .requisition-badge {
        display: inline-block;
        padding: 2px 8px;
        border-radius: 4px;
        font-size: 0.7rem;
        font-weight: 600;
        text-transform: uppercase;
    }

    .badge-all { background: #dbeafe; color: #1d4ed8; }
    .badge-stock-request { background: #ede9fe; color: #6d28d9; }
    .badge-rma-transfer { background: #dcfce7; color: #15803d; }
    .badge-repaired-transfer { background: #ffedd5; color: #c2410c; }

    /* ===== INLINE MESSAGES ===== */
    .inline-message {
        border-radius: var(--radius-md);
        padding: 8px 12px;
        font-size: 0.85rem;
        margin: 6px 0;
    }

    .inline-error { background: #fef2f2; color: #dc2626; border: 1px solid #fecaca; }

    .access-denied {
        background: #f5f3ff;
        border: 1px solid #ddd6fe;
        border-left: 4px solid #8b5cf6;
        border-radius: var(--radius-lg);
        padding: 20px 24px;
        margin: 20px 0;
    }

    .access-denied h3 { color: #6d28d9; margin: 0 0 6px 0; }
    .access-denied-hint { color: var(--color-text-tertiary); font-size: 0.8rem; }

    .empty-state {
        text-align: center;
        padding: 40px 20px;
        border-radius: 12px;
        margin: 16px 0;
    }

    .empty-state-title {
        font-size: 1.05rem;
        font-weight: 600;
        color: var(--color-text-primary);
        margin-top: 12px;
    }

    .empty-state-message {
        color: var(--color-text-tertiary);
        font-size: 0.875rem;
        margin-top: 4px;
    }

    .success-state {
        background: #ecfdf5;
        border: 1px solid #a7f3d0;
    }

    /* ===== SIDEBAR ===== */
    [data-testid="stSidebar"] {
        background: var(--color-sidebar-bg) !important;
    }

    [data-testid="stSidebar"] [data-testid="stBaseButton-secondary"],
    [data-testid="stSidebar"] [data-testid="stBaseButton-primary"] {
        width: 100% !important;
        justify-content: flex-start !important;
        border: none !important;
        border-radius: var(--radius-md) !important;
        font-size: 13px !important;
    }

    [data-testid="stSidebar"] [data-testid="stBaseButton-secondary"] {
        background: transparent !important;
        color: #cbd5e1 !important;
    }

    [data-testid="stSidebar"] [data-testid="stBaseButton-secondary"]:hover {
        background: var(--color-sidebar-hover) !important;
        color: #ffffff !important;
    }

    [data-testid="stSidebar"] [data-testid="stBaseButton-primary"] {
        background: var(--color-sidebar-active) !important;
        color: var(--color-brand-primary) !important;
        font-weight: 600 !important;
    }

    .sidebar-brand {
        padding: 20px 16px 16px 16px;
        text-align: center;
    }

    .sidebar-brand-title {
        color: #f8fafc !important;
        font-size: 20px !important;
        font-weight: 800 !important;
        letter-spacing: -0.02em;
        margin: 0 !important;
        text-transform: none !important;
    }

    .sidebar-brand p {
        color: #64748b !important;
        font-size: 11px !important;
        margin: 0 !important;
        letter-spacing: 0.5px;
        text-transform: uppercase;
    }

    .user-info-card {
        background: linear-gradient(135deg, #1e293b 0%, #0f172a 100%);
        border-radius: 8px;
        padding: 12px 14px;
        margin: 8px 12px 12px 12px;
        border: 1px solid #334155;
    }

    .user-info-card .user-name {
        color: #f8fafc;
        font-weight: 600;
        font-size: 13px;
    }

    .user-info-card .user-role {
        color: #94a3b8;
        font-size: 11px;
    }

    .connection-status {
        display: inline-flex;
        align-items: center;
        gap: 6px;
        padding: 4px 10px;
        border-radius: 20px;
        font-size: 11px;
        font-weight: 500;
    }

    .status-connected { background: rgba(34, 197, 94, 0.15); color: #22c55e; }
    .status-disconnected { background: rgba(239, 68, 68, 0.15); color: #ef4444; }

    .nav-section-header {
        color: #64748b;
        font-size: 10px;
        font-weight: 600;
        text-transform: uppercase;
        letter-spacing: 1px;
        padding: 16px 16px 6px 16px;
    }

    .role-badge-compact {
        padding: 3px 8px;
        border-radius: 4px;
        font-size: 10px;
        font-weight: 600;
        text-transform: uppercase;
        background: rgba(249, 115, 22, 0.15);
        color: #f97316;
    }

    .sidebar-footer {
        text-align: center;
        padding: 12px;
        border-top: 1px solid #334155;
        margin-top: 8px;
    }

    .sidebar-footer .version { color: #475569; font-size: 10px; }
    .sidebar-footer .tech { color: #f97316; font-size: 10px; font-weight: 500; }
</style>
"""
