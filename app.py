import html
import streamlit as st

from diagramscholar.config import get_settings, configure_logging
from diagramscholar.errors import ConfigurationError, InvalidImageError
from diagramscholar.formatter import format_text, render_html
from diagramscholar.image_input import UPLOAD_EXTENSIONS, load_image
from diagramscholar.pipeline import DiagramAnalysisPipeline
from diagramscholar.session import StudySession, COMPLETE, ERROR, option_label


# Page config
st.set_page_config(
    page_title="DiagramScholar",
    page_icon="📘",
    layout="wide",
    initial_sidebar_state="collapsed",
)

try:
    settings = get_settings()
except ConfigurationError as e:
    st.error(str(e))
    st.stop()

configure_logging(settings.log_level)

st.markdown("""
<style>
    .main-title {
        font-size: 2.5rem !important;
        font-weight: 800;
        margin-bottom: 0;
    }
    .main-title span { color: #fbbf24; }
    .subtitle {
        color: #a5b4fc;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        font-size: 0.75rem;
    }
    .ds-h2 { border-bottom: 1px solid rgba(99, 102, 241, 0.4); padding-bottom: 0.5rem; }
    .ds-h3 { color: #fbbf24; text-transform: uppercase; font-size: 1rem; letter-spacing: 0.05em; }
    .ds-list li { margin-bottom: 0.5rem; }
    .ds-spacer { height: 0.75rem; }
    .ds-number { color: #f59e0b; font-weight: bold; font-family: monospace; }
    .ds-paragraph strong, .ds-list strong, .ds-numbered strong { color: #fde68a; }
    .relationship {
        font-style: italic;
        padding: 1rem;
        border-left: 4px solid #f59e0b;
        background: rgba(255, 255, 255, 0.05);
        border-radius: 0 8px 8px 0;
    }
</style>
""", unsafe_allow_html=True)


# Initialize Pipeline
@st.cache_resource
def get_pipeline():
    return DiagramAnalysisPipeline(
        api_key=settings.api_key,
        model=settings.model,
        quiz_size=settings.quiz_size,
    )


if 'study' not in st.session_state:
    st.session_state['study'] = StudySession(max_upload_bytes=settings.max_upload_bytes)
if 'uploader_key' not in st.session_state:
    st.session_state['uploader_key'] = 0

session: StudySession = st.session_state['study']


def reset_session():
    session.reset()
    # A new widget key clears the uploaded file
    st.session_state['uploader_key'] += 1


def run_analysis(uploaded_file):
    with st.status("Analyzing Visual Data...", expanded=True) as status:
        try:
            preview = load_image(uploaded_file.getvalue(), uploaded_file.name, uploaded_file.type,
                                 max_bytes=settings.max_upload_bytes)
        except InvalidImageError:
            preview = None
        # Unreadable uploads are reported by process_upload below
        if preview is not None:
            st.image(preview.data, width=160)
        st.write("Constructing explanation and formulating quiz")
        try:
            pipeline = get_pipeline()
        except ConfigurationError as e:
            session.reset()
            session.state.fail(str(e))
            status.update(label="❌ Processing Error", state="error")
            return
        if session.process_upload(pipeline, uploaded_file.getvalue(), uploaded_file.name, uploaded_file.type):
            status.update(label="✅ Analysis Complete!", state="complete", expanded=False)
        else:
            status.update(label="❌ Processing Error", state="error")


def render_chat_section():
    st.divider()
    st.markdown("#### 💬 Need Clarification?")
    for msg in session.chat.messages:
        with st.chat_message("user" if msg.sender == "user" else "assistant"):
            st.write(msg.text)

    with st.form(key="chat_form", clear_on_submit=True):
        question = st.text_input(
            "Question",
            placeholder="Ask a question about this diagram...",
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button("Ask")
    if submitted and question.strip():
        with st.spinner("Thinking..."):
            session.ask(get_pipeline(), question)
        st.rerun()


def render_results():
    quiz = session.quiz
    st.subheader("✅ Results")
    st.metric("Score", f"{quiz.percentage}%")
    if quiz.percentage == 100:
        st.markdown("🏆 **PERFECT**")
    st.markdown(f"### {quiz.feedback}")
    st.write(f"You scored **{quiz.score}** out of **{len(quiz.questions)}**")

    if st.button("Retake Assessment", type="primary", key="retake"):
        quiz.restart()
        st.rerun()

    if st.button("Generate New Questions", key="generate_more", disabled=session.is_generating_more):
        with st.spinner("Creating New Questions..."):
            session.generate_more_questions(get_pipeline())
        st.rerun()
    if session.notice:
        st.warning(session.notice)


def render_question():
    quiz = session.quiz
    question = quiz.current_question
    index = quiz.current_index

    head_col, count_col = st.columns([3, 1])
    with head_col:
        st.subheader("📝 Quiz")
    with count_col:
        st.markdown(f"**{index + 1}** / {len(quiz.questions)}")

    st.markdown(f"#### {question.question}")

    for i, option in enumerate(question.options):
        mark = ""
        if quiz.is_answered:
            if i == question.correctAnswerIndex:
                mark = " ✅"
            elif i == quiz.current_answer:
                mark = " ❌"
        if st.button(f"{option_label(i)}. {option}{mark}", key=f"opt_{index}_{i}",
                     disabled=quiz.is_answered, width="stretch"):
            quiz.select(i)
            st.rerun()

    if quiz.is_answered:
        if quiz.is_correct():
            st.success(f"**Correct**\n\n{question.explanation}")
        else:
            st.error(f"**Incorrect**\n\n{question.explanation}")

    prev_col, next_col = st.columns([1, 2])
    with prev_col:
        if st.button("← Previous", key=f"prev_{index}", disabled=quiz.is_first, width="stretch"):
            quiz.previous()
            st.rerun()
    with next_col:
        label = "Finish" if quiz.is_last else "Next →"
        if st.button(label, key=f"next_{index}", type="primary", width="stretch"):
            quiz.next()
            st.rerun()


def render_quiz_panel():
    if session.quiz.is_empty:
        st.info("No quiz questions could be generated for this image.")
        return
    if session.quiz.show_results:
        render_results()
    else:
        render_question()
    render_chat_section()


def render_explanation_panel():
    result = session.result
    st.caption("ACADEMIC ANALYSIS")
    st.header(result.title)
    st.markdown(render_html(format_text(result.explanation)), unsafe_allow_html=True)
    st.divider()
    st.markdown("#### Key Relationship Detail")
    st.markdown(f'<div class="relationship">{html.escape(result.relationshipDescription)}</div>',
                unsafe_allow_html=True)


# Main UI
title_col, action_col = st.columns([4, 1])
with title_col:
    st.markdown('<h1 class="main-title">Diagram<span>Scholar</span></h1>', unsafe_allow_html=True)
    st.markdown('<p class="subtitle">AI-Powered Learning Tool</p>', unsafe_allow_html=True)
with action_col:
    if session.state.status == COMPLETE:
        if st.button("⬆️ Analyze New"):
            reset_session()
            st.rerun()

if session.state.status == COMPLETE and session.result:
    st.image(session.image.data, caption="Original Source", width='stretch')
    col1, col2 = st.columns(2)
    with col1:
        render_explanation_panel()
    with col2:
        render_quiz_panel()

elif session.state.status == ERROR:
    st.error("### Processing Error")
    st.write(session.state.error)
    if st.button("Try Again"):
        reset_session()
        st.rerun()

else:
    st.markdown("## Master Technical Diagrams")
    st.markdown(
        "Upload your study materials. Our AI analyzes visual data to provide academic "
        "explanations and interactive practice quizzes instantly."
    )
    uploaded_file = st.file_uploader(
        "Select or drop a diagram here",
        type=UPLOAD_EXTENSIONS,
        key=f"uploader_{st.session_state['uploader_key']}",
        help="Compatible with JPG, PNG, WEBP",
    )
    if uploaded_file is not None:
        run_analysis(uploaded_file)
        st.session_state['uploader_key'] += 1
        st.rerun()
