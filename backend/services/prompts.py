"""Prompt construction for notes and replies."""

from typing import Optional

from backend.models.content import ContentSource, NoteLength

LENGTH_GUIDES = {
    NoteLength.BRIEF: (
        "Be VERY concise. Maximum 5-6 bullet points. Focus only on the most "
        "critical information. Skip minor details."
    ),
    NoteLength.STANDARD: (
        "Be comprehensive but clear. Include all key points with moderate "
        "detail. Aim for 8-12 bullet points."
    ),
    NoteLength.DETAILED: (
        "Be thorough and in-depth. Include all information with explanations. "
        "Provide context and examples where helpful. Aim for 15+ bullet points."
    ),
}

TONE_GUIDES = {
    "friendly": "Be warm, personable, use friendly language. Show genuine interest.",
    "professional": "Be formal and business-appropriate. Use proper grammar, avoid slang. Be respectful yet confident.",
    "casual": "Be relaxed and conversational. Use natural language, contractions are fine. Keep it light.",
    "firm": "Be assertive and clear. State your position confidently. Be direct but not rude.",
    "humorous": "Add light humor and wit while still being appropriate.",
    "empathetic": "Show understanding and compassion. Acknowledge their feelings. Be supportive and caring.",
    "enthusiastic": "Be excited and energetic! Use positive, uplifting language.",
    "apologetic": "Express genuine apology and understanding. Offer to make things right.",
    "grateful": "Express sincere thanks and appreciation.",
    "confident": "Be self-assured and decisive without being arrogant.",
}

STYLE_GUIDES = {
    "short": "Keep it brief - 2-3 sentences maximum. Get straight to the point.",
    "detailed": "Be comprehensive. Explain your reasoning. Address all points mentioned.",
    "polite": "Add extra courtesies. Thank them, wish them well.",
    "direct": "No filler or pleasantries. State exactly what you mean clearly.",
    "persuasive": "Use compelling arguments and reasoning to influence their decision.",
    "diplomatic": "Be tactful and balanced. Avoid conflict while maintaining your position.",
    "storytelling": "Share a brief anecdote or example to make your point more relatable.",
    "numbered": "Organize your response with numbered points for clarity.",
}

FORMAT_GUIDES = {
    "email": "Format as a proper email with a greeting, body paragraph(s) and a sign-off. Don't include a subject line.",
    "whatsapp": "Format for WhatsApp: conversational, no formal greeting or sign-off, emojis are okay if they fit.",
    "letter": 'Format as a formal letter starting with "Dear [appropriate title]," and a formal closing, leaving [Your Name] at the end.',
    "sms": "Format for SMS: very brief, no greeting or sign-off, a few short lines at most.",
    "linkedin": "Format for LinkedIn: professional but personable, clear purpose, professional closing.",
    "twitter": "Format for Twitter/X: under 280 characters if possible, punchy and engaging.",
    "slack": "Format for Slack/Teams: casual but professional, clear and scannable.",
}

DEFAULT_TONE = "professional"
DEFAULT_STYLE = "short"
DEFAULT_FORMAT = "email"

NOTES_FORMAT = """FORMAT YOUR RESPONSE AS:
# Appropriate Title Based on Content

**Section headers in bold**
• Organized content with bullet points
• Sub-points indented properly

## Key Takeaways
• Most important point 1
• Most important point 2
• Most important point 3"""

SOURCE_INTROS = {
    ContentSource.TEXT: (
        "You are an expert note-taking assistant. Transform the following "
        "content into perfectly organized, professional notes."
    ),
    ContentSource.WEBSITE: (
        "You are an expert note-taking assistant. Create organized notes from "
        "the following text extracted from a web page."
    ),
    ContentSource.VIDEO: (
        "You are an expert video summarizer. Create detailed notes from this "
        "video transcript. Reconstruct the logical flow of the video and ignore "
        'filler speech ("um", "guys", "welcome back").'
    ),
}

IMAGE_PROMPT = """You are an expert at analyzing images and extracting information. Analyze this image thoroughly and create comprehensive notes.

INSTRUCTIONS:
1. If it contains text/handwriting: Transcribe it accurately and organize it
2. If it's a diagram/chart: Explain what it shows and extract all data
3. If it's a photo of notes/whiteboard: Clean up and organize the content
4. If it's any other image: Describe it and note key observations

LENGTH REQUIREMENT: {length}

{format}

Generate the notes now:"""

VOICE_PROMPT = """You are an expert transcriber and note-taker. Convert this voice recording into organized, professional notes.

INSTRUCTIONS:
1. Capture the spoken content accurately
2. Clean up filler words (um, uh, like, you know)
3. Organize by topics/themes mentioned
4. Extract action items if any are mentioned
5. Highlight important names, dates, numbers

LENGTH REQUIREMENT: {length}

{format}

Generate the notes now:"""

VOICE_FALLBACK_PROMPT = """The user has recorded an audio note but we couldn't process the audio directly.

Please provide a template they can use to organize their voice notes, with sections for
the recording date, main topic, key points discussed, action items and additional notes.
End with a tip to record in a quieter environment for better results."""

PDF_PROMPT = """The user has uploaded a PDF file named: "{filename}"

Since the PDF content cannot be read directly, provide a professional note-taking template
for it with sections for a document overview, main content, key takeaways, action items and
additional notes. Title the template "Notes Template for: {filename}"."""

REPLY_PROMPT = """You are an expert communication assistant. Generate {count} distinct, ready-to-send replies for this message.

ORIGINAL MESSAGE TO REPLY TO:
\"\"\"
{message}
\"\"\"

REPLY REQUIREMENTS:
• Tone: {tone}
• Style: {style}
• Format: {format}

IMPORTANT RULES:
1. Each reply must be COMPLETE and ready to copy-paste
2. Each reply should take a slightly different approach/angle
3. Match the tone EXACTLY to what was requested
4. Be contextually aware - understand what they're asking/saying
5. Don't include any labels like "Reply 1:" or explanations
6. Separate each reply with exactly: {delimiter}

Generate {count} replies now:"""


def length_guide(note_length: str) -> str:
    try:
        return LENGTH_GUIDES[NoteLength(note_length)]
    except ValueError:
        return LENGTH_GUIDES[NoteLength.STANDARD]


def build_notes_prompt(
    source: ContentSource,
    content: str,
    note_length: str = NoteLength.STANDARD.value,
    source_url: Optional[str] = None,
) -> str:
    """
    Build the notes prompt for a content source.

    For image and voice sources ``content`` is ignored (the payload travels
    as an attachment); for pdf it is the file name.
    """
    length = length_guide(note_length)

    if source == ContentSource.IMAGE:
        return IMAGE_PROMPT.format(length=length, format=NOTES_FORMAT)
    if source == ContentSource.VOICE:
        return VOICE_PROMPT.format(length=length, format=NOTES_FORMAT)
    if source == ContentSource.PDF:
        return PDF_PROMPT.format(filename=content)

    sections = [SOURCE_INTROS[source], ""]
    if source_url:
        sections.append(f"SOURCE: {source_url}\n")
    sections += [
        "INPUT CONTENT:",
        '"""',
        content,
        '"""',
        "",
        f"LENGTH REQUIREMENT: {length}",
        "",
        NOTES_FORMAT,
        "",
        "Generate the notes now:",
    ]
    return "\n".join(sections)


def build_voice_fallback_prompt() -> str:
    return VOICE_FALLBACK_PROMPT


def build_reply_prompt(
    message: str,
    tone: Optional[str] = None,
    style: Optional[str] = None,
    format: Optional[str] = None,
    count: int = 3,
    delimiter: str = "---REPLY---",
) -> str:
    """Build the prompt asking for ``count`` delimiter-separated replies."""
    return REPLY_PROMPT.format(
        count=count,
        message=message,
        tone=TONE_GUIDES.get(tone or "", TONE_GUIDES[DEFAULT_TONE]),
        style=STYLE_GUIDES.get(style or "", STYLE_GUIDES[DEFAULT_STYLE]),
        format=FORMAT_GUIDES.get(format or "", FORMAT_GUIDES[DEFAULT_FORMAT]),
        delimiter=delimiter,
    )
