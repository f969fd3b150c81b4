"""
Web application for Double Pendulum Analysis

Interactive dashboard to run simulations and inspect energy drift, angles,
the fading trail of the lower mass and the convergence of the integrator.
"""

from typing import Any, Dict, List

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import numpy as np
import plotly.graph_objs as go

from pendulum import (
    DynamicalState,
    PendulumSimulator,
    PhysicalConstants,
    TrailBuffer,
    estimate_convergence_order,
    run_timestep_analysis,
)

CONVERGENCE_DTS = [0.1, 0.05, 0.02, 0.01]
TRAIL_FADE_LEVELS = 20


def _number_input(input_id: str, label: str, value: float, **kwargs: Any) -> html.Div:
    return html.Div([
        html.Label(label, style={'fontWeight': 'bold', 'marginBottom': '5px'}),
        dcc.Input(id=input_id, type='number', value=value,
                  style={'width': '100%', 'padding': '8px'}, **kwargs),
    ], style={'width': '13%', 'display': 'inline-block', 'marginRight': '2%'})


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Double Pendulum Analysis"

# Define app layout
app.layout = html.Div([
    html.Div([
        html.H1("Double Pendulum Analysis",
                style={'textAlign': 'center', 'marginBottom': '30px'}),

        html.Div([
            _number_input('g-input', "Gravity G:", 1.2, step=0.1),
            _number_input('m-input', "Mass M:", 1.0, min=0.01, step=0.1),
            _number_input('l-input', "Length L:", 1.0, min=0.01, step=0.1),
            _number_input('duration-input', "Duration (s):", 10.0, min=0.1, max=60.0, step=0.5),
            _number_input('dt-input', "Step (s):", 0.005, min=0.0001, max=0.05, step=0.001),
            _number_input('seed-input', "Seed:", 1, min=0, step=1),
            html.Button('Run Simulation', id='run-button',
                        style={'width': '14%', 'padding': '10px', 'fontSize': '16px',
                               'backgroundColor': '#4CAF50', 'color': 'white',
                               'border': 'none', 'borderRadius': '5px', 'cursor': 'pointer'})
        ], style={'marginBottom': '30px', 'padding': '20px', 'backgroundColor': '#f5f5f5',
                  'borderRadius': '10px'}),

        html.Div(id='status-message', style={'marginBottom': '20px', 'fontSize': '14px'}),

        dcc.Loading(
            id="loading",
            type="default",
            children=[
                html.Div(id='results-container')
            ]
        )
    ], style={'maxWidth': '1400px', 'margin': '0 auto', 'padding': '20px'})
])


def run_dashboard_simulation(
    g: float, m: float, l: float, duration: float, dt: float, seed: int, trail_capacity: int = 400
) -> Dict[str, Any]:
    """
    Run one random pendulum and replay its lower mass into a trail

    Returns:
        Dictionary with time, state, energy, analysis, trail and initial_state
    """
    constants = PhysicalConstants(g=g, m=m, l=l)
    simulator = PendulumSimulator(constants, trail_capacity=trail_capacity, seed=int(seed))
    initial_state = simulator.state
    t, state, energy = simulator.simulate(duration=duration, dt=dt)
    analysis = simulator.analyze_energy(t, state, energy)

    trail = TrailBuffer(trail_capacity)
    for row in state[1:]:
        _, lower = simulator.model.positions(DynamicalState.from_sequence(row))
        trail.push(lower)

    return {
        "time": t,
        "state": state,
        "energy": energy,
        "analysis": analysis,
        "trail": trail,
        "initial_state": initial_state,
        "constants": constants,
    }


def create_trail_figure(trail: TrailBuffer, length: float) -> go.Figure:
    """Draw the trail as line segments whose opacity follows the segment weight"""
    fig = go.Figure()
    # Segments are bucketed by weight so the figure stays a handful of traces
    buckets: List[Dict[str, List[Any]]] = [{"x": [], "y": []} for _ in range(TRAIL_FADE_LEVELS)]
    for newer, older, weight in trail.weighted_segments():
        level = min(TRAIL_FADE_LEVELS - 1, int(weight * TRAIL_FADE_LEVELS))
        buckets[level]["x"].extend([older[0], newer[0], None])
        buckets[level]["y"].extend([older[1], newer[1], None])

    for level, bucket in enumerate(buckets):
        if not bucket["x"]:
            continue
        fig.add_trace(
            go.Scatter(
                x=bucket["x"],
                y=bucket["y"],
                mode="lines",
                line=dict(color="blue", width=2),
                opacity=(level + 1) / TRAIL_FADE_LEVELS,
                showlegend=False,
                hoverinfo="skip",
            )
        )

    extent = 2.1 * length
    fig.update_layout(
        title="Lower Mass Trail",
        xaxis=dict(range=[-extent, extent], title="x"),
        yaxis=dict(range=[-extent, extent], title="y", scaleanchor="x"),
        height=500,
        template="plotly_white",
    )
    return fig


@app.callback(
    [Output("results-container", "children"), Output("status-message", "children")],
    [Input("run-button", "n_clicks")],
    [
        State("g-input", "value"),
        State("m-input", "value"),
        State("l-input", "value"),
        State("duration-input", "value"),
        State("dt-input", "value"),
        State("seed-input", "value"),
    ],
)
def update_results(
    n_clicks: int | None, g: float, m: float, l: float, duration: float, dt: float, seed: int
) -> tuple[Any, Any]:
    """Run simulation and update results"""
    if n_clicks is None:
        raise PreventUpdate

    try:
        # Validate inputs
        if duration is None or duration <= 0 or duration > 60:
            return [], html.Div(
                "Error: Duration must be between 0 and 60 seconds.",
                style={"color": "red"},
            )

        if dt is None or dt <= 0 or dt > 0.05:
            return [], html.Div(
                "Error: Step must be between 0 and 0.05 seconds.",
                style={"color": "red"},
            )

        # Run simulation
        simulation = run_dashboard_simulation(g, m, l, duration, dt, seed or 0)
        convergence = run_timestep_analysis(
            CONVERGENCE_DTS, duration=1.0, initial_state=simulation["initial_state"],
            constants=simulation["constants"],
        )

        status_msg = html.Div(
            f"Simulation complete! {len(simulation['time']) - 1} steps integrated.",
            style={"color": "green"},
        )

        return create_results_layout(simulation, convergence), status_msg

    except Exception as e:
        error_msg = f"Error: {str(e)}"
        return [], html.Div(error_msg, style={"color": "red"})


def create_results_layout(
    simulation: Dict[str, Any], convergence: Dict[float, Dict[str, Any]]
) -> html.Div:
    """Create the results visualization layout"""
    t = simulation["time"]
    state = simulation["state"]
    energy = simulation["energy"]
    analysis = simulation["analysis"]

    # 1. Angles over time
    fig1 = go.Figure()
    for column, name in ((0, "Upper rod"), (1, "Lower rod")):
        fig1.add_trace(
            go.Scatter(
                x=t,
                y=state[:, column] * 180 / np.pi,  # Convert to degrees
                mode="lines",
                name=name,
                line=dict(width=2),
                hovertemplate=f"{name}<br>Time: %{{x:.2f}}s<br>Angle: %{{y:.1f}}°<extra></extra>",
            )
        )

    fig1.update_layout(
        title="Rod Angles Over Time",
        xaxis_title="Time (s)",
        yaxis_title="Angle (degrees)",
        hovermode="closest",
        height=400,
        template="plotly_white",
    )

    # 2. Relative energy drift
    e0 = analysis["initial_energy"]
    scale = abs(e0) if abs(e0) > 1e-12 else 1.0
    fig2 = go.Figure()
    fig2.add_trace(
        go.Scatter(
            x=t,
            y=(energy - e0) / scale,
            mode="lines",
            name="Energy drift",
            line=dict(color="red" if not analysis["is_conserved"] else "green", width=2),
            hovertemplate="Time: %{x:.2f}s<br>Drift: %{y:.3e}<extra></extra>",
        )
    )

    fig2.update_layout(
        title="Relative Energy Drift",
        xaxis_title="Time (s)",
        yaxis_title="(E - E0) / |E0|",
        height=400,
        template="plotly_white",
    )

    # 3. Fading trail of the lower mass
    fig3 = create_trail_figure(simulation["trail"], simulation["constants"].l)

    # Convergence table
    dts = sorted(convergence, reverse=True)
    errors = [convergence[dt]["final_error"] for dt in dts]
    order = estimate_convergence_order(dts, errors) if all(e > 0 for e in errors) else float("nan")
    table_rows = [
        html.Tr([
            html.Th("Step (ms)"),
            html.Th("Final Error"),
            html.Th("Max Energy Drift"),
            html.Th("Conserved"),
        ])
    ]

    for dt in dts:
        row_analysis = convergence[dt]["analysis"]
        conserved_color = "green" if row_analysis["is_conserved"] else "red"
        table_rows.append(
            html.Tr([
                html.Td(f"{dt * 1000:g}"),
                html.Td(f"{convergence[dt]['final_error']:.3e}"),
                html.Td(f"{row_analysis['max_rel_drift']:.3e}"),
                html.Td(
                    "Yes" if row_analysis["is_conserved"] else "No",
                    style={"color": conserved_color, "fontWeight": "bold"},
                ),
            ])
        )

    return html.Div([
        html.H2("Simulation Results", style={"marginTop": "30px", "marginBottom": "20px"}),
        html.Div([
            html.P(f"Initial energy: {e0:.6f}  |  Max relative drift: {analysis['max_rel_drift']:.3e}"
                   f"  |  Flips of the lower rod: {analysis['flips']}"),
        ], style={"marginBottom": "20px"}),
        html.Div([
            html.H3(f"Step Size Convergence (estimated order {order:.2f})", style={"marginBottom": "15px"}),
            html.Table(
                table_rows,
                style={
                    "width": "100%",
                    "borderCollapse": "collapse",
                    "marginBottom": "30px",
                    "fontSize": "14px",
                },
            ),
        ], style={"marginBottom": "30px"}),
        html.Div([
            html.Div([dcc.Graph(figure=fig1)], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig2)], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig3)], style={"marginBottom": "30px"}),
        ]),
    ])


if __name__ == "__main__":
    app.run(debug=True, port=8050)
