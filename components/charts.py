"""
Dashboard chart builders.
Figures are built from the (label, count) tuples carried by DashboardStats.
"""

import plotly.graph_objects as go

from config.constants import PRIORITY_COLORS
from services.status_catalog import label_for

_FONT = dict(family='Inter, -apple-system, sans-serif', size=12, color='#374151')
_HOVER_LABEL = dict(
    bgcolor='#1F2937',
    bordercolor='#374151',
    font=dict(family='Inter, -apple-system, sans-serif', size=13, color='#FFFFFF'),
    align='left'
)
PALETTE = ['#3B82F6', '#10B981', '#F59E0B', '#EF4444', '#8B5CF6', '#06B6D4', '#EC4899', '#84CC16']


def create_bar_chart(
    x_data: list,
    y_data: list,
    x_label: str,
    y_label: str,
    colors: list = None,
    height: int = 320,
    hover_context: str = "Tickets",
    total_for_percent: int = None
) -> go.Figure:
    """
    Bar chart with light gridlines and share-of-total tooltips.

    Args:
        x_data: Category labels
        y_data: Counts, same length as x_data
        x_label: Label for x-axis
        y_label: Label for y-axis
        colors: Per-bar colors; defaults to the palette
        height: Chart height in pixels
        hover_context: Noun shown in the tooltip
        total_for_percent: Total used for the share line in the tooltip
    """
    hover_template = (
        '<b style="font-size:14px">%{x}</b><br>'
        f'<span style="color:#6B7280">{hover_context}:</span> <b>%{{y:,}}</b>'
    )
    customdata = None
    if total_for_percent and total_for_percent > 0:
        customdata = [v / total_for_percent * 100 for v in y_data]
        hover_template += '<br><span style="color:#6B7280">Share:</span> <b>%{customdata:.1f}%</b>'
    hover_template += '<extra></extra>'

    bar_colors = colors or [PALETTE[i % len(PALETTE)] for i in range(len(x_data))]

    fig = go.Figure(data=[go.Bar(
        x=x_data,
        y=y_data,
        marker=dict(color=bar_colors, line=dict(width=0)),
        hovertemplate=hover_template,
        customdata=customdata,
        hoverlabel=_HOVER_LABEL
    )])

    fig.update_layout(
        height=height,
        paper_bgcolor='#FFFFFF',
        plot_bgcolor='#FFFFFF',
        font=_FONT,
        margin=dict(t=20, b=60, l=50, r=20),
        showlegend=False,
        xaxis=dict(
            title=dict(text=x_label, font=dict(size=12, color='#4B5563'), standoff=12),
            tickfont=dict(size=11, color='#6B7280'),
            showgrid=False,
            showline=True,
            linecolor='#E5E7EB',
            type='category',
            tickangle=0 if len(x_data) <= 6 else -45
        ),
        yaxis=dict(
            title=dict(text=y_label, font=dict(size=12, color='#4B5563'), standoff=12),
            tickfont=dict(size=11, color='#9CA3AF'),
            showgrid=True,
            gridcolor='#F3F4F6',
            showline=True,
            linecolor='#E5E7EB',
            rangemode='tozero'
        ),
        bargap=0.3,
        transition=dict(duration=200, easing='cubic-in-out'),
        hovermode='closest'
    )
    fig.update_xaxes(showspikes=False)
    fig.update_yaxes(showspikes=False)
    return fig


def create_donut_chart(labels: list, values: list, colors: list = None, height: int = 320) -> go.Figure:
    fig = go.Figure(data=[go.Pie(
        labels=labels,
        values=values,
        hole=0.55,
        marker=dict(colors=colors or PALETTE[:len(labels)], line=dict(color='#FFFFFF', width=2)),
        textinfo='value',
        hovertemplate='<b>%{label}</b><br>%{value:,} tickets (%{percent})<extra></extra>',
        hoverlabel=_HOVER_LABEL,
        sort=False
    )])
    fig.update_layout(
        height=height,
        paper_bgcolor='#FFFFFF',
        font=_FONT,
        margin=dict(t=20, b=20, l=20, r=20),
        legend=dict(orientation='v', x=1.0, y=0.5, font=dict(size=11))
    )
    return fig


# ============================================
# DASHBOARD FIGURES
# ============================================

def priority_chart(stats) -> go.Figure:
    """Tickets per priority band, colored by band."""
    labels = [label for label, _ in stats.tickets_by_priority]
    counts = [count for _, count in stats.tickets_by_priority]
    colors = [PRIORITY_COLORS.get(label, '#64748B') for label in labels]
    return create_bar_chart(labels, counts, "Priority", "Tickets", colors=colors,
                            total_for_percent=sum(counts))


def status_chart(stats) -> go.Figure:
    """Donut of tickets per lifecycle status, labelled and colored from the status catalog."""
    displays = [label_for(status) for status, _ in stats.tickets_by_status]
    return create_donut_chart(
        [d.label for d in displays],
        [count for _, count in stats.tickets_by_status],
        colors=[d.hex for d in displays]
    )


def category_chart(stats) -> go.Figure:
    labels = [label for label, _ in stats.tickets_by_category]
    counts = [count for _, count in stats.tickets_by_category]
    return create_bar_chart(labels, counts, "Category", "Tickets", total_for_percent=sum(counts))
