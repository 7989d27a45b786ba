"""
HireFlow package.

This package contains submodules for taking a batch of résumés and a
job description through a fixed screening sequence and presenting the
ranked results.  Each submodule implements one step of the flow.

The high‑level flow is:

1. **resume** – Extract text from uploaded résumés (PDF, DOCX, plain
   text) and turn it into a structured `Candidate` using regex and
   keyword heuristics, optionally assisted by an LLM.
2. **jobs** – Validate and normalise the job description entered by
   the recruiter into a `JobRequirements` dataclass.
3. **agents** – Prompt templates for the HR, technical, experience,
   cultural fit and final reviewer agents plus the parsing of their
   answers.
4. **pipeline** – Run the five agents in a fixed order for every
   candidate, compile scores and rank the batch.
5. **report** / **store** – Format downloadable reports and persist
   sessions as JSON on disk.
6. **web** / **cli** – Flask UI and command line entry points wiring
   together the above components.
"""

__version__ = "0.3.0"
