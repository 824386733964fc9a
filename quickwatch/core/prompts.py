summary_template = """
    Below is a transcript from a YouTube video. Please provide a concise summary
    ({min_words}-{max_words} words) that captures the main points and key insights:

    {text}
    """

map_template = """
    Summarize this part of a YouTube video transcript, keeping every main point
    and key insight:

    {text}
    """

reduce_template = """
    Combine these partial summaries of a YouTube video into one coherent summary
    ({min_words}-{max_words} words) that captures the main points and key insights:

    {summaries}
    """

prune_template = """
    AGGRESSIVELY reduce this transcript to only the ABSOLUTELY ESSENTIAL lines while
    maintaining proper sentence structure and meaning.
    The goal is to create a concise summary of the content, while still preserving
    the overall context and flow of the conversation.
    Return ONLY a JSON array of line indices to KEEP, like [0, 15, 30].
    NO explanations, just numbers.

    Transcript:
    {transcript}
    """

key_moments_template = """
    Below is a timestamped transcript from a YouTube video. Identify the {max_moments}
    most important moments a viewer should watch, in the order they occur.

    Return ONLY a JSON array of objects like
    [{{"startTime": 12.5, "endTime": 40.0, "text": "what happens", "importance": "why it matters"}}]
    where startTime and endTime are seconds taken from the transcript timestamps.

    Transcript:
    {transcript}
    """
