"""Prompt templates for deploy note generation."""

from __future__ import annotations

from deploynote.drafter.models import ChangeContext

SYSTEM_PROMPT = "You are a helpful assistant that generates deploy notes for pull requests."

NO_DESCRIPTION = "No description provided"

USER_PROMPT_TEMPLATE = """\
You are an expert developer tasked with creating a deploy note for a pull request.
Your goal is to create simple, concrete test steps that can be executed without interpretation.

CRITICAL REQUIREMENT - NEVER RETURN EMPTY OUTPUT
- YOU MUST ALWAYS RETURN A PROPERLY FORMATTED DEPLOY NOTE
- IF THERE ARE NO TESTS TO RUN, USE THE NULL DEPLOY NOTE FORMAT (SHOWN BELOW)
- AN EMPTY RESPONSE IS A FAILURE - ALWAYS PROVIDE CONTENT
- DEFAULT TO THE NULL DEPLOY NOTE IF UNSURE

IMPORTANT GUIDELINES:
1. Write test steps that are mechanically executable - no thinking or interpretation should be needed
2. Use simple, human language - avoid technical jargon unless absolutely necessary
3. Each test step should be concrete and verifiable (e.g. "Click the submit button" not "Ensure the form validates")
4. Remove any steps that require subjective interpretation
5. Don't include steps that can't be clearly tested
6. Focus on what a real human would actually test, not theoretical validations
7. ALWAYS start with the null deploy note as your baseline and only modify it if there are actual test steps

Here's the information about the PR:
- Title: {title}
- PR Number: {number}
- PR URL: {url}
- Branch: {branch}

Commit messages:
{commit_messages}

Changed files:
{changed_files}

PR description:
{body}

Based on this information, generate a deploy note in the following format:

### [PR Title](PR URL)

**Test Script**

1. [Simple, concrete action. Describes test case in full detail, also explains expected result.]
2. [Second test case described in full detail, also explains expected result.]

**Launch Requirements**

- List only concrete, necessary setup steps
- If no special requirements, just say "No special requirements"

EXAMPLES:
Good test steps:
- "Click the 'Submit' button"
- "Check that the success message appears"
- "Enter 'test@example.com' in the email field"

Bad test steps (avoid these):
- "Verify system validation"
- "Check that the localization works"
- "Ensure proper data handling"

----------------------------------------------------------------------
NULL DEPLOY NOTE (USE THIS WHEN NO TESTS ARE NEEDED):
{null_note}
----------------------------------------------------------------------

REMEMBER: NEVER RETURN AN EMPTY RESPONSE. IF IN DOUBT, USE THE NULL DEPLOY NOTE ABOVE.\
"""

_NULL_NOTE_EXAMPLE = """\
### [PR Title](PR URL)

**Test Script**

Nothing to test

**Launch Requirements**

No special requirements\
"""


class PromptTemplate:
    """Renders the system/user prompt pair for a ChangeContext.

    Rendering is a pure function of the context: the same context always
    yields the same prompt.
    """

    def render(self, context: ChangeContext) -> tuple[str, str]:
        """Return (system_prompt, user_prompt)."""
        user_prompt = USER_PROMPT_TEMPLATE.format(
            title=context.title,
            number=context.number,
            url=context.url,
            branch=context.branch,
            commit_messages="\n".join(context.commit_messages),
            changed_files="\n".join(context.changed_files),
            body=context.body or NO_DESCRIPTION,
            null_note=_NULL_NOTE_EXAMPLE,
        )
        return SYSTEM_PROMPT, user_prompt
