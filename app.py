# app.py
import html
from datetime import datetime
import streamlit as st
import requests
from config import API_URL, MAX_TWEET_CHARS

CONTENT_TYPES = ["Auto-detect", "promotional", "educational", "storytelling", "question", "statistic"]

# App title and description
st.title("Twitter Thread Generator")
st.markdown("Analyze tweet styles, generate a full thread on any topic and post it as a reply chain")

# Custom CSS for better tweet display
st.markdown("""
<style>
.thread-part {
    border-left: 4px solid #1DA1F2;
    padding: 12px;
    margin-bottom: 12px;
    background-color: white;
    border-radius: 4px;
}
</style>
""", unsafe_allow_html=True)

# Set up the sidebar
with st.sidebar:
    st.header("About")
    st.markdown(
        """
        This tool builds Twitter threads in three steps:

        1. A hook tweet to grab attention
        2. Follow-up tweets that keep the hook's style
        3. An optional call-to-action tweet

        Each tweet is written from a prompt the model writes for itself.
        """
    )

    st.header("Credits")
    st.markdown("Built with Groq, FastAPI and Playwright")


def call_api(payload: dict, timeout: int = 120):
    """POST an action to the API and return (data, error)."""
    try:
        response = requests.post(f"{API_URL}/api", json=payload, timeout=timeout)
    except requests.exceptions.RequestException as e:
        return None, f"Connection error: {str(e)}"

    if response.status_code != 200:
        try:
            return None, response.json().get("detail", response.text)
        except ValueError:
            return None, response.text
    return response.json(), None


if "thread" not in st.session_state:
    st.session_state["thread"] = []

tab1, tab2, tab3 = st.tabs(["Analyze Tweet", "Generate Thread", "Post Thread"])

# Tab 1: Analyze a tweet
with tab1:
    st.header("Analyze Tweet Style")
    tweet_text = st.text_area("Tweet text", height=120)

    if st.button("Analyze") and tweet_text:
        data, error = call_api({"action": "analyze", "tweet_text": tweet_text})
        if error:
            st.error(error)
        else:
            analysis = data["analysis"]
            col1, col2 = st.columns(2)
            with col1:
                st.markdown(f"**Hook:** {analysis['hook']}")
                st.markdown(f"**Content type:** {analysis['content_type']}")
                st.markdown(f"**Emojis:** {analysis['emoji_count']} {analysis['emojis']}")
                st.markdown(f"**Call to action:** {'Yes' if analysis['has_cta'] else 'No'}")
                st.markdown(f"**Media reference:** {'Yes' if analysis['has_media_reference'] else 'No'}")
            with col2:
                st.markdown(f"**Sentences:** {analysis['sentence_count']}")
                st.markdown(f"**Avg sentence length:** {analysis['avg_sentence_length']:.1f}")
                st.markdown(f"**Length:** {analysis['tweet_length']} chars")
                flags = [name.replace("uses_", "").replace("_", " ")
                         for name, used in analysis["formatting"].items() if used]
                st.markdown(f"**Formatting:** {', '.join(flags) or 'plain'}")

# Tab 2: Generate a thread
with tab2:
    st.header("Generate a Thread")

    col1, col2 = st.columns(2)
    with col1:
        topic = st.text_input("Topic", help="Enter a topic for your thread")
        follow_up_count = st.number_input("Follow-up tweets", min_value=1, max_value=10, value=3)
    with col2:
        include_cta = st.checkbox("Include Call-to-Action Tweet", value=True)
        use_style = st.checkbox("Use Custom Style", value=False)

    style = None
    if use_style:
        with st.expander("Custom Style", expanded=True):
            emoji_choice = st.selectbox("Emoji Count", ["Auto-detect"] + list(range(0, 11)))
            content_type = st.selectbox("Content Type", CONTENT_TYPES)
            bullet_choice = st.selectbox("Bullet Points", ["Auto-detect", "Yes", "No"])
        # Fields left on Auto-detect are inherited from the hook tweet
        style = {}
        if emoji_choice != "Auto-detect":
            style["emoji_count"] = int(emoji_choice)
        if bullet_choice != "Auto-detect":
            style["uses_bullet_points"] = bullet_choice == "Yes"
        if content_type != "Auto-detect":
            style["content_type"] = content_type
        style = style or None

    if st.button("Generate Thread"):
        if not topic.strip():
            st.error("Topic is required")
        else:
            with st.spinner(f"Generating thread on {topic}..."):
                data, error = call_api({
                    "action": "generate",
                    "topic": topic,
                    "follow_up_count": int(follow_up_count),
                    "include_cta": include_cta,
                    "style": style,
                })
            if error:
                st.error(error)
            else:
                st.session_state["thread"] = data["thread"]
                st.session_state["thread_has_cta"] = include_cta

    thread = st.session_state["thread"]
    if thread:
        st.subheader("Generated Thread")
        for i, tweet in enumerate(thread):
            if i == 0:
                label = "Hook Tweet"
            elif i == len(thread) - 1 and st.session_state.get("thread_has_cta"):
                label = "CTA Tweet"
            else:
                label = f"Tweet {i + 1}"
            over = " ⚠️" if len(tweet) > MAX_TWEET_CHARS else ""
            st.markdown(f"""
            <div class="thread-part">
                <strong>{label}</strong> <small>{len(tweet)} chars{over}</small>
                <p>{html.escape(tweet)}</p>
            </div>
            """, unsafe_allow_html=True)
        st.info("Go to the 'Post Thread' tab to publish it!")

# Tab 3: Post the thread
with tab3:
    st.header("Post to Twitter")
    thread = st.session_state["thread"]

    if not thread:
        st.info("Generate a thread first to post it to Twitter")
    else:
        with st.form("post_form"):
            username = st.text_input("Twitter username")
            password = st.text_input("Twitter password", type="password")
            headless = st.checkbox("Run browser headless", value=True)
            schedule = st.checkbox("Schedule first tweet", value=False)
            scheduled_date = st.date_input("Date")
            scheduled_clock = st.time_input("Time")
            submitted = st.form_submit_button("Post Thread")

        if submitted:
            if not username or not password:
                st.error("Twitter credentials are required")
            else:
                payload = {
                    "action": "post",
                    "tweets": thread,
                    "credentials": {"username": username, "password": password},
                    "headless": headless,
                }
                if schedule:
                    payload["scheduled_time"] = datetime.combine(scheduled_date, scheduled_clock).isoformat()

                with st.spinner(f"Posting {len(thread)} tweets..."):
                    data, error = call_api(payload, timeout=300)
                if error:
                    st.error(error)
                else:
                    results = data["results"]
                    for i, result in enumerate(results):
                        if result["success"]:
                            st.success(f"Tweet {i + 1}: posted {result.get('url') or ''}")
                        else:
                            st.error(f"Tweet {i + 1}: {result.get('error')}")
                    if len(results) < len(thread):
                        st.warning(f"{len(thread) - len(results)} tweets were not posted")
