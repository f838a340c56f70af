# ----------------- visualizer.py -----------------
import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import plotly.graph_objects as go


def tour_graph(cost_matrix):
    """Complete weighted digraph for a cost matrix, laid out on a circle."""
    n = len(cost_matrix)
    G = nx.DiGraph()
    G.add_nodes_from(range(n))
    for i in range(n):
        for j in range(n):
            if i != j:
                G.add_edge(i, j, weight=float(cost_matrix[i][j]))
    pos = nx.circular_layout(G)
    return G, pos


def _edge_coords(edges, pos):
    x, y = [], []
    for u, v in edges:
        x0, y0 = pos[u]
        x1, y1 = pos[v]
        x += [x0, x1, None]
        y += [y0, y1, None]
    return x, y


def draw_tour_animation(cost_matrix, iteration_tours, final_tour=None, show=True):
    """
    Plotly animation of the best tour of each iteration over the cost graph,
    ending with the final best tour. Returns the figure.
    """
    G, pos = tour_graph(cost_matrix)

    # ---------- Base edges ----------
    edge_x, edge_y = _edge_coords(G.edges(), pos)
    base_edge_trace = go.Scatter(
        x=edge_x, y=edge_y,
        line=dict(width=0.5, color='lightgray'),
        mode="lines",
        hoverinfo="none",
        name="Graph Edges",
        showlegend=False
    )

    # ---------- Nodes ----------
    node_trace = go.Scatter(
        x=[pos[n][0] for n in G.nodes()],
        y=[pos[n][1] for n in G.nodes()],
        mode="markers+text",
        text=[str(n) for n in G.nodes()],
        textposition="top center",
        marker=dict(size=12, color='blue', line=dict(width=2, color='darkblue')),
        name="Nodes",
        showlegend=True
    )

    # ---------- Frames for iterations ----------
    frames = []
    for idx, tour in enumerate(iteration_tours):
        x, y = _edge_coords(tour.edges(), pos)
        path_trace = go.Scatter(
            x=x, y=y,
            line=dict(width=4, color='orange'),
            mode="lines",
            name=f"Iteration {idx+1} (cost {tour.cost:g})",
            showlegend=True
        )
        frames.append(go.Frame(name=str(idx), data=[base_edge_trace, path_trace, node_trace]))

    # ---------- Final best tour ----------
    if final_tour is not None:
        x, y = _edge_coords(final_tour.edges(), pos)
        final_trace = go.Scatter(
            x=x, y=y,
            line=dict(width=6, color='red'),
            mode="lines",
            name=f"Best Tour (cost {final_tour.cost:g})"
        )
        frames.append(go.Frame(name="final", data=[base_edge_trace, final_trace, node_trace]))

    initial_data = frames[0].data if frames else [base_edge_trace, node_trace]

    fig = go.Figure(
        data=initial_data,
        layout=go.Layout(
            title="Ant-Q: Iteration Best Tours",
            showlegend=True,
            hovermode="closest",
            margin=dict(b=50, l=50, r=50, t=80),
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white',
            updatemenus=[{
                "buttons": [
                    {"args": [None, {"frame": {"duration": 500, "redraw": False},
                                     "fromcurrent": True, "transition": {"duration": 100}}],
                     "label": "▶ Play", "method": "animate"},
                    {"args": [[None], {"frame": {"duration": 0, "redraw": False},
                                       "mode": "immediate",
                                       "transition": {"duration": 0}}],
                     "label": "⏸ Pause", "method": "animate"}
                ],
                "direction": "left",
                "pad": {"r": 10, "t": 10},
                "type": "buttons",
                "x": 0.1,
                "xanchor": "right",
                "y": 1.02,
                "yanchor": "top"
            }],
            sliders=[{
                "steps": [
                    {"args": [[f.name], {"frame": {"duration": 0, "redraw": False},
                                         "mode": "immediate",
                                         "transition": {"duration": 0}}],
                     "label": f.name,
                     "method": "animate"} for f in frames
                ],
                "active": 0,
                "x": 0.1,
                "len": 0.85,
                "y": 0,
                "yanchor": "top",
                "currentvalue": {"prefix": "Iteration: ", "visible": True}
            }] if frames else []
        ),
        frames=frames
    )

    if show:
        fig.show()
    return fig


def plot_convergence(best_costs, save_path=None):
    """
    1D line plot of the global best tour cost per iteration.
    """
    best_costs = np.asarray(best_costs, dtype=float)
    plt.figure(figsize=(5, 3))
    plt.plot(np.arange(1, len(best_costs) + 1), best_costs, color='red')
    plt.title("Best Tour Cost Over Time")
    plt.xlabel("Iteration")
    plt.ylabel("Best Cost")
    plt.grid(True, alpha=0.3)
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
    else:
        plt.show()
    plt.close()
