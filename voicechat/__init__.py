"""
Retell Voice Chat - real-time voice conversations with a hosted Retell agent

This application lets a user talk to a conversational voice agent hosted on the
Retell AI platform. The platform does the speech recognition, dialogue and
speech synthesis; this package sets calls up and orchestrates them.

Architecture Overview:
- FastAPI server exposing /session-setup, a pass-through to the Retell SDK that
  creates an LLM, an agent and a web call and returns connection credentials
- Voice-chat client that captures microphone audio, streams it over the call
  socket, collects live transcript events and, after hangup, swaps in the
  finalized transcript produced by the platform

Key Components:
- client: Microphone capture, the call socket client and the controller
- config: Application-wide constants, environment settings and logging setup
- models: Pydantic schemas for the HTTP contract, socket events and transcripts
- services: Retell SDK facade and the session-setup HTTP client
- cli: Terminal front end for the controller

Getting Started:
1. Set up environment variables:
   - RETELL_API_KEY: Your Retell API key
   - RETELL_VOICE_ID: Agent voice (default 11labs-Adrian)
   - PORT / HOST: Server bind address (default 0.0.0.0:8000)
   - LOG_LEVEL: Logging level (default INFO)

2. Start the server:
   ```bash
   python run.py
   ```

3. Talk to the agent:
   ```bash
   python -m voicechat.cli --prompt "You are the head chef at a famous Japanese restaurant"
   ```
"""
