import time
from dataclasses import asdict

import av
import cv2
import streamlit as st
from streamlit_webrtc import webrtc_streamer, WebRtcMode, RTCConfiguration

# reuse the counter modules (app lives in src/)
from dashboard_state import STATE
from exercises import Exercise
from session_logger import save_session
from settings import DEFAULT_TARGET_REPS, MIN_TARGET_REPS, MAX_TARGET_REPS, TOKENS_PER_REP
from wallet import CATALOG


def video_frame_callback(frame: av.VideoFrame) -> av.VideoFrame:
    """Process each video frame; must not use st.session_state (runs in worker thread)."""
    detector = STATE.detector()
    img = frame.to_ndarray(format="bgr24")
    img = cv2.flip(img, 1)
    w = img.shape[1]

    pose_frame = detector.detect(img, time.monotonic() * 1000.0)

    with STATE.lock:
        session = STATE.session
        if session is None:
            return av.VideoFrame.from_ndarray(img, format="bgr24")
        session.on_pose_frame(pose_frame)
        reps, target, angle = session.reps, session.target_reps, session.debug.angle
        hint = session.status_hint()

    cv2.rectangle(img, (0, 0), (w, 40), (0, 0, 0), -1)
    cv2.putText(img, f"Reps {reps}/{target}", (10, 28), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2)
    cv2.putText(img, f"Ang: {int(angle)}", (w - 110, 28), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
    cv2.putText(img, hint, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 255), 2)

    return av.VideoFrame.from_ndarray(img, format="bgr24")


# ------------- Sidebar (UI) -------------
st.sidebar.title("⚙️ Workout")

exercise = Exercise(st.sidebar.radio("Exercise", [e.value for e in Exercise],
                                     format_func=lambda v: Exercise(v).label))
target_reps = st.sidebar.number_input("Target reps", MIN_TARGET_REPS, MAX_TARGET_REPS, DEFAULT_TARGET_REPS, 1)
start_btn = st.sidebar.button("▶️ Start session", key="start_session")
reset_btn = st.sidebar.button("🔁 Reset progress", key="reset_progress")

if start_btn:
    STATE.start_session(exercise, target_reps)
if reset_btn:
    STATE.reset()

with STATE.lock:
    session = STATE.session
    wallet = STATE.wallet
    if session is not None:
        snapshot = {
            "reps": session.reps,
            "target": session.target_reps,
            "tokens_earned": session.tokens_earned,
            "phase": session.phase.value,
            "fps": session.fps,
            "confidence": session.debug.confidence,
            "angle": session.debug.angle,
            "hint": session.status_hint(),
            "finished": session.finished,
        }
    else:
        snapshot = None
    tokens = wallet.tokens
    credits = dict(wallet.time_credits)

# ------------- Header -------------
st.title("RepLock — earn your screen time")
st.caption(f"+{TOKENS_PER_REP} tokens per rep")

col1, col2, col3, col4 = st.columns(4)
col1.metric("Tokens", tokens)
if snapshot:
    col2.metric("Reps", f"{snapshot['reps']}/{snapshot['target']}")
    col3.metric("Earned", f"+{snapshot['tokens_earned']}")
    col4.metric("Phase", snapshot["phase"])
    st.progress(min(1.0, snapshot["reps"] / snapshot["target"]))
    st.info(snapshot["hint"])
    if snapshot["finished"]:
        st.success("Target reached!")

# ------------- WebRTC Video -------------
RTC_CONFIGURATION = RTCConfiguration(
    {"iceServers": [{"urls": ["stun:stun.l.google.com:19302"]}]}
)

try:
    webrtc_streamer(
        key="replock",
        mode=WebRtcMode.SENDRECV,
        rtc_configuration=RTC_CONFIGURATION,
        media_stream_constraints={"video": True, "audio": False},
        video_frame_callback=video_frame_callback,
    )
except Exception as e:
    if "NoSessionError" in type(e).__name__ or "thread context" in str(e).lower():
        st.error(
            "WebRTC needs a proper Streamlit session. **Run the app from a terminal with:**\n\n"
            "`streamlit run src/streamlit_app.py`\n\n"
            "Then open http://localhost:8501 in your browser. Do not run the script with `python` or from an IDE run button."
        )
    else:
        raise

# ------------- Status panel -------------
if snapshot:
    st.subheader("Status")
    col_a, col_b, col_c = st.columns(3)
    col_a.write(f"Angle: **{int(snapshot['angle'])}°**")
    col_b.write(f"Confidence: **{snapshot['confidence'] * 100:.0f}%**")
    col_c.write(f"FPS: **{snapshot['fps']:.1f}**")

# ------------- Shop -------------
st.subheader("Shop")
for item in CATALOG:
    col_item, col_buy = st.columns([3, 1])
    col_item.write(f"**{item.title}** — {item.token_cost} tokens  (owned: {credits[item.platform]} min)")
    if col_buy.button("Buy", key=f"buy_{item.platform}"):
        with STATE.lock:
            ok = STATE.wallet.buy(item)
        if ok:
            st.success(f"{item.minutes} min added for {item.platform}.")
        else:
            st.warning("Not enough tokens. Do more reps to buy this pack.")


# ------------- Save session -------------
def finalize_and_save():
    with STATE.lock:
        current = STATE.session
        if current is None:
            st.warning("No session to save yet.")
            return
        current.finish()
        summary = current.summary()
    path = save_session(summary)
    st.success(f"Session summary saved to `{path}` ✅")
    st.json(asdict(summary))


st.button("💾 Finish & save session", on_click=finalize_and_save)
