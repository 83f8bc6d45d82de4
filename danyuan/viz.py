"""
DanYuan Visualization Tools

Membrane potential traces, u/v phase plane, HH gate probabilities,
HH ionic currents and synaptic current for a recorded session.
"""

from typing import Optional

import matplotlib.pyplot as plt

from danyuan.simulation.recorder import PlotBounds, TraceRecorder


# =============================================================================
# Color scheme
# =============================================================================
TRACE_COLORS = {
    'membrane_potential': '#1f77b4',
    'phase': '#9C27B0',
    'm_gate': '#F44336',
    'h_gate': '#4CAF50',
    'n_gate': '#FF9800',
    'sodium_current': '#E91E63',
    'potassium_current': '#2196F3',
    'leak_current': '#607D8B',
    'synaptic_current': '#009688',
}


def _finish(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f'Saved: {save_path}')
    return fig


# =============================================================================
# Membrane Potential
# =============================================================================
def plot_membrane_potential(recorder: TraceRecorder, bounds: Optional[PlotBounds] = None,
                            figsize=(12, 4), save_path=None):
    """
    Plot membrane potential over time.

    Args:
        recorder: TraceRecorder with recorded samples
        bounds: optional PlotBounds for axis limits
    """
    t = recorder.series('time')
    v = recorder.series('membrane_potential')

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(t, v, color=TRACE_COLORS['membrane_potential'], linewidth=1.0)

    ax.set_xlabel('Time (ms)')
    ax.set_ylabel('V (mV)')
    ax.set_title('Membrane Potential', fontweight='bold')
    if bounds is not None:
        (x_min, x_max), (y_min, y_max) = bounds.main_limits
        if x_max > x_min:
            ax.set_xlim(x_min, x_max)
        ax.set_ylim(y_min, y_max)
    return _finish(fig, save_path)


# =============================================================================
# Phase Plane (Izhikevich)
# =============================================================================
def plot_phase_plane(recorder: TraceRecorder, bounds: Optional[PlotBounds] = None,
                     figsize=(6, 6), save_path=None):
    """Plot recovery u against membrane potential v."""
    u = recorder.series('recovery')
    v = recorder.series('membrane_potential')

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(u, v, color=TRACE_COLORS['phase'], linewidth=0.8)

    ax.set_xlabel('u (recovery)')
    ax.set_ylabel('v (mV)')
    ax.set_title('Phase Plane', fontweight='bold')
    if bounds is not None:
        (x_min, x_max), (y_min, y_max) = bounds.phase_limits
        ax.set_xlim(x_min, x_max)
        ax.set_ylim(y_min, y_max)
    return _finish(fig, save_path)


# =============================================================================
# HH Gates
# =============================================================================
def plot_gates(recorder: TraceRecorder, figsize=(12, 4), save_path=None):
    """Plot m, h, n gate open probabilities."""
    t = recorder.series('time')

    fig, ax = plt.subplots(figsize=figsize)
    for name, label in (('m_gate', 'm'), ('h_gate', 'h'), ('n_gate', 'n')):
        ax.plot(t, recorder.series(name), label=label,
                color=TRACE_COLORS[name], linewidth=1.2)

    ax.set_xlabel('Time (ms)')
    ax.set_ylabel('Open probability')
    ax.set_title('Gating Variables', fontweight='bold')
    ax.legend(loc='upper right', fontsize=8)
    ax.set_ylim(0, 1)
    return _finish(fig, save_path)


# =============================================================================
# HH Ionic Currents
# =============================================================================
def plot_currents(recorder: TraceRecorder, bounds: Optional[PlotBounds] = None,
                  figsize=(12, 4), save_path=None):
    """Plot I_Na, I_K and I_L over time."""
    t = recorder.series('time')

    fig, ax = plt.subplots(figsize=figsize)
    for name, label in (('sodium_current', 'I_Na'),
                        ('potassium_current', 'I_K'),
                        ('leak_current', 'I_L')):
        ax.plot(t, recorder.series(name), label=label,
                color=TRACE_COLORS[name], linewidth=1.2)

    ax.set_xlabel('Time (ms)')
    ax.set_ylabel('Current')
    ax.set_title('Ionic Currents', fontweight='bold')
    ax.legend(loc='upper right', fontsize=8)
    if bounds is not None:
        ax.set_ylim(bounds.current_y_min, bounds.current_y_max)
    return _finish(fig, save_path)


# =============================================================================
# Synaptic Current
# =============================================================================
def plot_synaptic_current(recorder: TraceRecorder, figsize=(12, 3), save_path=None):
    t = recorder.series('time')
    i_syn = recorder.series('synaptic_current')

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(t, i_syn, color=TRACE_COLORS['synaptic_current'], linewidth=1.2)
    ax.axhline(0.0, color='#333333', linewidth=0.5, alpha=0.5)

    ax.set_xlabel('Time (ms)')
    ax.set_ylabel('I_syn')
    ax.set_title('Synaptic Current', fontweight='bold')
    return _finish(fig, save_path)


# =============================================================================
# Session Overview
# =============================================================================
def plot_session(session, figsize=(12, 9), save_path=None):
    """
    Plot every trace relevant to the session's neuron model in one figure.

    Izhikevich: membrane potential + phase plane.
    Hodgkin-Huxley: membrane potential + gates + currents.
    A synaptic current panel is added when the session has synapses.
    """
    from danyuan.core.model_types import NeuronModelType

    recorder = session.recorder
    bounds = session.bounds
    is_hh = session.config.neuron_model == NeuronModelType.HODGKIN_HUXLEY
    has_syn = session.config.has_synapses

    n_rows = (3 if is_hh else 2) + (1 if has_syn else 0)
    fig, axes = plt.subplots(n_rows, 1, figsize=figsize)

    t = recorder.series('time')
    v = recorder.series('membrane_potential')

    ax = axes[0]
    ax.plot(t, v, color=TRACE_COLORS['membrane_potential'], linewidth=1.0)
    ax.set_ylabel('V (mV)')
    ax.set_ylim(bounds.plot_y_min, bounds.plot_y_max)
    ax.set_title(f'{session.config.neuron_model.name} @ I_ext={session.external_current}',
                 fontweight='bold')

    if is_hh:
        ax = axes[1]
        for name, label in (('m_gate', 'm'), ('h_gate', 'h'), ('n_gate', 'n')):
            ax.plot(t, recorder.series(name), label=label,
                    color=TRACE_COLORS[name], linewidth=1.0)
        ax.set_ylabel('Gate')
        ax.set_ylim(bounds.probability_y_min, bounds.probability_y_max)
        ax.legend(loc='upper right', fontsize=8)

        ax = axes[2]
        for name, label in (('sodium_current', 'I_Na'),
                            ('potassium_current', 'I_K'),
                            ('leak_current', 'I_L')):
            ax.plot(t, recorder.series(name), label=label,
                    color=TRACE_COLORS[name], linewidth=1.0)
        ax.set_ylabel('Current')
        ax.legend(loc='upper right', fontsize=8)
    else:
        ax = axes[1]
        ax.plot(recorder.series('recovery'), v,
                color=TRACE_COLORS['phase'], linewidth=0.8)
        ax.set_xlabel('u (recovery)')
        ax.set_ylabel('v (mV)')

    if has_syn:
        ax = axes[-1]
        ax.plot(t, recorder.series('synaptic_current'),
                color=TRACE_COLORS['synaptic_current'], linewidth=1.0)
        ax.set_ylabel('I_syn')

    axes[-1].set_xlabel('Time (ms)' if (is_hh or has_syn) else 'u (recovery)')
    return _finish(fig, save_path)
