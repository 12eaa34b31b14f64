import math

import plotly.graph_objects as go

from vessel_integrity.config import CRITICAL_REMAINING_LIFE, INFINITE_REMAINING_LIFE, WARNING_REMAINING_LIFE

# Color mapping for component status
STATUS_COLORS = {
    'BELOW_MINIMUM': 'red',
    'CRITICAL': 'darkorange',
    'WARNING': 'gold',
    'ACCEPTABLE': 'green',
}


def _empty_figure(message):
    fig = go.Figure()
    fig.add_annotation(text=message, xref="paper", yref="paper", x=0.5, y=0.5, showarrow=False)
    return fig


def create_thickness_margin_chart(results_df):
    """
    Actual vs. minimum required thickness per component, coloured by status.

    Parameters:
    - results_df: DataFrame from results_to_dataframe / AggregationRun.to_dataframe
    """
    if results_df.empty:
        return _empty_figure("No calculation results to display")

    # Components with no achievable minimum thickness plot without a t_min bar
    minimum = [None if math.isinf(v) else v for v in results_df['minimum_thickness']]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=results_df['component_name'],
        y=results_df['actual_thickness'],
        name='Actual Thickness',
        marker_color=[STATUS_COLORS.get(s, 'gray') for s in results_df['status']],
        text=results_df['status_message'],
        hovertemplate='<b>%{x}</b><br>Actual: %{y:.3f} in<br>%{text}<extra></extra>',
    ))
    fig.add_trace(go.Bar(
        x=results_df['component_name'],
        y=minimum,
        name='Minimum Required',
        marker_color='lightgray',
        hovertemplate='<b>%{x}</b><br>t min: %{y:.3f} in<extra></extra>',
    ))

    fig.update_layout(
        title="Component Thickness vs. Minimum Required",
        xaxis_title="Component",
        yaxis_title="Thickness (in)",
        barmode='group',
        height=450,
        legend=dict(yanchor="top", y=0.99, xanchor="right", x=0.99),
    )
    return fig


def create_remaining_life_chart(results_df):
    """
    Remaining life per component with the critical and warning thresholds.
    The 999-year 'no measurable corrosion' value is shown as a capped bar.
    """
    if results_df.empty:
        return _empty_figure("No calculation results to display")

    cap = 50
    remaining = [min(v, cap) for v in results_df['remaining_life']]
    labels = ['No measurable corrosion' if v >= INFINITE_REMAINING_LIFE else f"{v:.1f} yrs"
              for v in results_df['remaining_life']]

    fig = go.Figure(go.Bar(
        x=results_df['component_name'],
        y=remaining,
        marker_color=[STATUS_COLORS.get(s, 'gray') for s in results_df['status']],
        text=labels,
        textposition='outside',
        name='Remaining Life',
    ))

    fig.add_hline(
        y=CRITICAL_REMAINING_LIFE,
        line_dash="dash",
        line_color="red",
        annotation_text=f"Critical: {CRITICAL_REMAINING_LIFE} yrs",
    )
    fig.add_hline(
        y=WARNING_REMAINING_LIFE,
        line_dash="dot",
        line_color="orange",
        annotation_text=f"Warning: {WARNING_REMAINING_LIFE} yrs",
    )

    fig.update_layout(
        title="Remaining Life by Component",
        xaxis_title="Component",
        yaxis_title="Remaining Life (years)",
        height=450,
        showlegend=False,
    )
    return fig
