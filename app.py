import csv
import os

import streamlit as st
from dotenv import load_dotenv

from plagcheck.core.config import load_settings
from plagcheck.core.logging_config import setup_logging
from plagcheck.core.pipeline import SessionConfig, analyze_corpus
from plagcheck.core.text_handler import TextHandler, extract_zip_archive
from plagcheck.core.threshold import from_percent
from plagcheck.core.tokenizer import DEFAULT_STOPWORDS
from plagcheck.core.validation import ValidationError
from plagcheck.utils.report_writer import (
    flags_to_dataframe, format_flag_lines, matrix_to_dataframe
)

# Load environment variables from .env file
load_dotenv()
settings = load_settings(dotenv=False)

setup_logging(
    log_level=settings.log_level,
    log_dir=settings.log_dir,
    structured_logging=settings.structured_logs,
    enable_console=True,
    enable_file=True
)


def initialize_session_state():
    """Initialize all session state variables."""
    if "current_directory" not in st.session_state:
        st.session_state.current_directory = None
    if "corpus" not in st.session_state:
        st.session_state.corpus = []
    if "report" not in st.session_state:
        st.session_state.report = None


def reset_analysis_state(new_directory):
    """Drop the loaded corpus and report when the source directory changes."""
    st.session_state.current_directory = new_directory
    st.session_state.corpus = []
    st.session_state.report = None


def get_directory_input():
    """Sidebar: a ZIP upload of .txt files or a local directory path."""
    st.sidebar.markdown("### 📤 Documents")

    zip_file = st.sidebar.file_uploader(
        "📁 ZIP file containing .txt documents",
        type="zip",
        help="Every .txt file inside the archive is compared with every other one"
    )
    if zip_file:
        # A new upload gets a fresh directory, which also resets the analysis
        if st.session_state.get('upload_id') != zip_file.file_id:
            try:
                upload_dir = extract_zip_archive(zip_file, st.session_state.get('upload_dir'))
            except ValidationError as e:
                st.sidebar.error(f"❌ {e.message}")
                return None
            st.session_state.upload_dir = upload_dir
            st.session_state.upload_id = zip_file.file_id
        return st.session_state.upload_dir

    directory = st.sidebar.text_input("📂 Or a local directory path")
    return directory.strip() or None


def get_session_config():
    st.sidebar.markdown("### ⚙️ Settings")
    use_stopwords = st.sidebar.checkbox("Ignore common stopwords", value=settings.use_stopwords)
    threshold_percent = st.sidebar.slider(
        "Plagiarism threshold (%)",
        min_value=0.0,
        max_value=100.0,
        value=float(round(settings.threshold * 100, 2)),
        step=0.5
    )
    return SessionConfig(
        use_stopwords=use_stopwords,
        stopwords=DEFAULT_STOPWORDS,
        threshold=from_percent(threshold_percent),
    )


def display_report(report):
    st.markdown("## 🗂️ Similarity Matrix (%)")
    matrix_df = matrix_to_dataframe(report)
    st.dataframe(matrix_df.style.format("{:.2f}%"), use_container_width=True)

    st.markdown(f"## 🚩 Flagged Pairs (≥ {report.config.threshold_percent:.2f}%)")
    flags_df = flags_to_dataframe(report)
    if flags_df.empty:
        st.success("No document pair reached the threshold.")
    else:
        st.dataframe(flags_df, use_container_width=True, hide_index=True)

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "⬇️ similarity_matrix.csv",
            matrix_df.to_csv(quoting=csv.QUOTE_NONNUMERIC).encode('utf-8'),
            file_name="similarity_matrix.csv",
            mime="text/csv"
        )
    with col2:
        st.download_button(
            "⬇️ plagiarism_flags.txt",
            "\n".join(format_flag_lines(report)).encode('utf-8'),
            file_name="plagiarism_flags.txt",
            mime="text/plain"
        )


def main():
    st.set_page_config(page_title="📚 TF-IDF Plagiarism Checker", layout="wide")
    st.title("📚 TF-IDF Plagiarism Checker")
    initialize_session_state()

    directory = get_directory_input()
    config = get_session_config()

    if not directory or not os.path.isdir(directory):
        st.info("👋 Upload a ZIP of .txt files or enter a directory to begin.")
        return

    if directory != st.session_state.current_directory:
        reset_analysis_state(directory)

    if st.sidebar.button("🚀 Compute Similarity", type="primary"):
        try:
            with st.spinner("Reading documents..."):
                st.session_state.corpus = TextHandler(directory).load_documents()
        except ValidationError as e:
            st.error(f"❌ {e.message}")
            return

        if len(st.session_state.corpus) < 2:
            st.warning("⚠️ Load at least 2 documents to compare.")
            return

        with st.spinner("Computing TF-IDF similarity..."):
            st.session_state.report = analyze_corpus(st.session_state.corpus, config)

    report = st.session_state.report
    if report is None:
        return

    # Settings changed since the last run: recompute on the same corpus
    if report.config != config:
        report = analyze_corpus(st.session_state.corpus, config)
        st.session_state.report = report

    st.caption(f"{len(report.documents)} documents · {len(report.vocabulary)} distinct terms")
    display_report(report)


if __name__ == "__main__":
    main()
