"""
Virtual Memory Visualizer — Paging, Replacement & Segmentation

This application drives the simulation engines interactively:
    - Demand paging over a page reference sequence
    - Page Replacement Algorithms (FIFO, LRU, Optimal)
    - Segmentation with base/limit address translation

Built with Streamlit for the web interface and Plotly for visualizations.
The engines live in engine.py and segmentation.py; this file only
renders their state and decides when to step.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import time                                  # For pacing auto-play

import plotly.graph_objects as go            # Interactive plotting library
import streamlit as st                       # Web application framework

from engine import (
    DEFAULT_FRAME_COUNT,
    DEFAULT_SEQUENCE,
    FIFO_CURSOR,
    FIFO_QUEUE,
    InvalidConfiguration,
    PageReferenceSimulator,
    ReplacementPolicy,
    SequenceExhausted,
)
from segmentation import (
    DEFAULT_ADDRESS,
    DEFAULT_SEGMENTS,
    MEMORY_SIZE,
    InvalidSegment,
    Segment,
    SegmentationFault,
    build_segment_table,
    translate,
)
from utils import (
    AUTO_PLAY_INTERVAL,
    format_hit_rate,
    format_sequence,
    frame_color,
    parse_sequence,
    random_page,
    segment_color,
)

POLICY_LABELS = {
    "FIFO": ReplacementPolicy.FIFO,
    "LRU": ReplacementPolicy.LRU,
    "Optimal": ReplacementPolicy.OPTIMAL,
}

# Configure the Streamlit page
st.set_page_config(page_title="Virtual Memory Visualizer", layout="wide")

st.title("Virtual Memory Visualizer — Paging, Replacement & Segmentation")

# -----------------------------------------------------------------------------
# SIDEBAR - Mode & Settings
# -----------------------------------------------------------------------------

mode = st.sidebar.radio("Mode", ["Paging", "Segmentation"])

st.sidebar.header("Simulation Settings")

policy_label = st.sidebar.selectbox("Replacement Policy", options=list(POLICY_LABELS))
policy = POLICY_LABELS[policy_label]

frame_count = st.sidebar.number_input(
    "Frames",
    min_value=1,
    max_value=10,
    value=DEFAULT_FRAME_COUNT,
    step=1,
)

# FIFO approximation used by the first version of this visualizer
fifo_mode = FIFO_CURSOR if st.sidebar.checkbox(
    "FIFO: evict frame (step mod frames)", value=False
) else FIFO_QUEUE

# -----------------------------------------------------------------------------
# SESSION STATE - Simulator Persistence
# -----------------------------------------------------------------------------

if 'sequence' not in st.session_state:
    st.session_state.sequence = list(DEFAULT_SEQUENCE)
if 'playing' not in st.session_state:
    st.session_state.playing = False

config = (int(frame_count), policy, fifo_mode, mode)

if 'simulator' not in st.session_state:
    st.session_state.simulator = PageReferenceSimulator(
        int(frame_count), policy, st.session_state.sequence, fifo_mode
    )
    st.session_state.config = config
elif st.session_state.config != config:
    # Changing frames, policy or mode starts a fresh run
    st.session_state.simulator.reset(
        int(frame_count), policy, st.session_state.sequence, fifo_mode
    )
    st.session_state.config = config
    st.session_state.playing = False

simulator: PageReferenceSimulator = st.session_state.simulator


def restart(sequence):
    """Replace the reference sequence and start over."""
    try:
        simulator.reset(int(frame_count), policy, sequence, fifo_mode)
    except InvalidConfiguration as e:
        st.sidebar.error(str(e))
        return
    st.session_state.sequence = list(sequence)
    st.session_state.playing = False


# =============================================================================
# SEGMENTATION MODE
# =============================================================================

if mode == "Segmentation":
    if 'segments' not in st.session_state:
        st.session_state.segments = build_segment_table(DEFAULT_SEGMENTS)

    # ----- Segment configuration -----
    st.sidebar.markdown("---")
    st.sidebar.header("Segments")
    new_id = st.sidebar.number_input("Segment ID (int)", min_value=0, value=len(st.session_state.segments))
    new_name = st.sidebar.text_input("Segment name", value="Segment")
    new_base = st.sidebar.number_input("Segment base", min_value=0, value=0)
    new_limit = st.sidebar.number_input("Segment limit", min_value=1, value=1000)

    if st.sidebar.button("Create Segment"):
        try:
            st.session_state.segments = build_segment_table(
                st.session_state.segments
                + [Segment(int(new_id), new_name, int(new_base), int(new_limit))]
            )
            st.sidebar.success(f"Created segment {int(new_id)}")
        except InvalidSegment as e:
            st.sidebar.error(str(e))

    if st.sidebar.button("Restore Default Segments"):
        st.session_state.segments = build_segment_table(DEFAULT_SEGMENTS)

    col1, col2 = st.columns([1, 1])
    segments = st.session_state.segments

    with col1:
        st.subheader("Segment Table")
        st.table([
            {"seg_id": s.seg_id, "name": s.name, "base": s.base,
             "limit": s.limit, "end": s.end}
            for s in segments
        ])

        st.subheader("Address Translation")
        address = st.number_input("Logical address", value=DEFAULT_ADDRESS, step=1)
        try:
            result = translate(segments, int(address))
        except SegmentationFault as e:
            # A simulated hardware fault, not an application error
            st.error(f"✗ {e}")
        else:
            st.success("✓ Valid Access")
            st.write(f"Segment: **{result.segment.name}**")
            st.write(f"Physical Address: `{result.physical_address}`")
            st.write(f"Offset within segment: `{result.offset}`")

    with col2:
        # ----- Memory Map -----
        st.subheader("Memory Map")
        fig = go.Figure()
        for s in segments:
            fig.add_trace(go.Bar(
                x=["Memory"],
                y=[s.limit],
                base=[s.base],
                name=f"{s.name} ({s.base}-{s.end})",
                marker_color=segment_color(s.seg_id),
                hovertext=f"{s.name}: base={s.base} limit={s.limit}",
                hoverinfo='text',
            ))
        fig.add_hline(y=int(address), line_dash="dash", line_color="red")
        fig.update_layout(
            height=500,
            barmode='overlay',
            yaxis=dict(range=[MEMORY_SIZE, 0], title="Address"),
        )
        st.plotly_chart(fig, use_container_width=True)

    st.stop()  # Paging view below is not rendered in segmentation mode

# =============================================================================
# PAGING MODE
# =============================================================================

# -----------------------------------------------------------------------------
# SIDEBAR - Reference Sequence
# -----------------------------------------------------------------------------

st.sidebar.markdown("---")
st.sidebar.header("Reference Sequence")

sequence_input = st.sidebar.text_input(
    "Page sequence (comma separated)",
    value=format_sequence(st.session_state.sequence),
)

if st.sidebar.button("Apply Sequence"):
    try:
        restart(parse_sequence(sequence_input))
    except ValueError as e:
        st.sidebar.error(str(e))

if st.sidebar.button("Add Random Page"):
    restart(st.session_state.sequence + [random_page()])

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Controls")

    if st.button("Step", disabled=simulator.is_finished):
        try:
            record = simulator.step()
            st.success(f"Page {record.page} -> {record.outcome} (frame={record.frame})")
        except SequenceExhausted as e:
            st.warning(str(e))

    if st.button("Pause" if st.session_state.playing else "Play",
                 disabled=simulator.is_finished):
        st.session_state.playing = not st.session_state.playing

    if st.button("Reset"):
        restart(st.session_state.sequence)

    st.subheader("Event Log")
    for ev in simulator.event_log[-20:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

state = simulator.get_state()
last = state.history[-1] if state.history else None

with col2:
    # ----- Frame Table -----
    st.subheader("Physical Frames")
    fig = go.Figure()
    x, y, text, colors = [], [], [], []
    for i, page in enumerate(state.frames):
        text.append(f"F{i}: " + (f"P{page}" if page is not None else "Free"))
        touched = last is not None and last.frame == i
        colors.append(frame_color(last.outcome if touched else None))
        x.append(i)
        y.append(1)
    fig.add_trace(go.Bar(x=x, y=y, text=text, marker_color=colors,
                         hovertext=text, hoverinfo='text'))
    fig.update_layout(height=150, showlegend=False, yaxis=dict(showticklabels=False))
    st.plotly_chart(fig, use_container_width=True)

    # ----- Statistics -----
    st.subheader("Statistics")
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Step", f"{state.cursor}/{state.cursor + state.remaining}")
    m2.metric("Page Hits", state.counters.hits)
    m3.metric("Page Faults", state.counters.faults)
    m4.metric("Hit Rate", f"{format_hit_rate(state.counters.hits, state.counters.faults)}%")

    # ----- History Grid -----
    st.subheader("History")
    if not state.history:
        st.write("No references processed yet")
    else:
        rows = []
        for rec in state.history:
            row = {"step": rec.step, "page": rec.page}
            for i, page in enumerate(rec.frames):
                row[f"F{i}"] = "" if page is None else page
            row["result"] = rec.outcome
            row["evicted"] = "" if rec.evicted is None else rec.evicted
            rows.append(row)
        st.table(rows)

# -----------------------------------------------------------------------------
# AUTO-PLAY - one step per interval, stops itself at the end of the sequence
# -----------------------------------------------------------------------------

if st.session_state.playing:
    if simulator.is_finished:
        st.session_state.playing = False
    else:
        time.sleep(AUTO_PLAY_INTERVAL)
        simulator.step()
        st.rerun()
