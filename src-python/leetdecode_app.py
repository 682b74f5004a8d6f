# leetdecode_app.py
# LeetDecode 1.x - Gradio UI (Gibberish -> Human)

import logging

import gradio as gr
import leetdecode as ld


CSS = """
<style>
#title { margin-bottom: 0.25rem; font-family: monospace; color: #00ff9d; }
.small { opacity: 0.90; font-size: 0.92rem; }
textarea, input { font-family: monospace !important; }
</style>
"""

ABOUT_MD = r"""
## About LeetDecode

Type leet-style gibberish (`h3ll0 w0rld`) and press **Decode**.

- **Online:** the text is sent to the decode service, which replies with the human-readable version.
- **Offline fallback:** if the service can't be reached or answers with an error,
  a local table is applied instead: `0→o`, `1→i`, `3→e`, `4→a`, `6→G`.
  Everything else passes through unchanged.

**Generate Example** fills the input with 2–4 random words from a small leet word bank.
**Hackerify** randomly re-applies the substitutions (`o→0`, `e→3`, `i→1`, `a→4`, `G→6`) to about half
of the eligible characters.
"""

DECODE_LABEL = "Decode"
LOADING_LABEL = "…"


def _session(session):
    return session if session is not None else ld.DecoderSession()


def do_decode(text_in: str, session):
    session = _session(session)
    steps = session.decode_steps(text_in or "")
    state = None
    for state in steps:
        yield (
            state.output,
            gr.update(value=LOADING_LABEL if state.loading else DECODE_LABEL),
            session,
        )
    if state is None:
        # blank input: leave the output alone
        yield gr.update(), gr.update(value=DECODE_LABEL), session


def do_generate_example(session):
    session = _session(session)
    return session.generate_example().input, session


def do_hackerify(text_in: str, session):
    session = _session(session)
    session.set_input(text_in or "")
    return session.hackerify().input, session


def build_app():
    with gr.Blocks(title="LeetDecode — Gibberish → Human") as demo:
        gr.HTML(CSS)
        session = gr.State(None)

        gr.Markdown("# Gibberish → Human", elem_id="title")

        with gr.Tabs():
            with gr.TabItem("Demo"):
                with gr.Row():
                    text_in = gr.Textbox(
                        placeholder="Enter gibberish",
                        show_label=False,
                        lines=1,
                        scale=4,
                    )
                    btn_dec = gr.Button(DECODE_LABEL, variant="primary", scale=1)

                with gr.Row():
                    btn_example = gr.Button("Generate Example")
                    btn_hack = gr.Button("Hackerify")

                text_out = gr.Textbox(label="Decoded Output", lines=8, interactive=False)

                btn_dec.click(
                    do_decode,
                    inputs=[text_in, session],
                    outputs=[text_out, btn_dec, session],
                )
                text_in.submit(
                    do_decode,
                    inputs=[text_in, session],
                    outputs=[text_out, btn_dec, session],
                )
                btn_example.click(
                    do_generate_example,
                    inputs=[session],
                    outputs=[text_in, session],
                )
                btn_hack.click(
                    do_hackerify,
                    inputs=[text_in, session],
                    outputs=[text_in, session],
                )

            with gr.TabItem("About"):
                gr.Markdown(ABOUT_MD)

    return demo


if __name__ == "__main__":
    settings = ld.DEFAULT_SETTINGS
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = build_app()
    app.launch()
