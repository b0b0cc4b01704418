import os
import sys
import json
import base64

current_dir = os.path.dirname(os.path.abspath(__file__))
src_root = os.path.abspath(os.path.join(current_dir, "../../src"))
sys.path.append(src_root)

from dotenv import load_dotenv

# Carrega GEMINI_API_KEY / FRONTEND_URL do .env da pasta backend/
load_dotenv(os.path.join(current_dir, "../../.env"))

OUTPUT_FILE = "generated_image.png"
PROMPT = "A small orange cat wearing an astronaut helmet, studio lighting"


def run_local_proxy():
    print("🧪 INICIANDO TESTE LOCAL: Proxy generate_image contra a API real")
    print("-" * 60)

    if not os.environ.get("GEMINI_API_KEY"):
        print("❌ ERRO: Variável GEMINI_API_KEY não encontrada.")
        print("   -> Crie um arquivo .env na pasta backend/ com: GEMINI_API_KEY=AIza...")
        return

    from handlers.generate_image import lambda_handler

    # Simula o evento que o API Gateway enviaria a partir do frontend
    event = {
        "httpMethod": "POST",
        "headers": {
            "Origin": "http://localhost:3000",
            "Content-Type": "application/json",
        },
        "body": json.dumps({
            "contents": [{"parts": [{"text": PROMPT}]}],
            "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
        }),
    }

    print("🔄 Executando lambda_handler localmente...")
    response = lambda_handler(event, None)

    print(f"   Status: {response['statusCode']}")
    print(f"   Allow-Origin: {response['headers'].get('Access-Control-Allow-Origin')}")

    body = json.loads(response["body"])
    if response["statusCode"] != 200:
        print(f"❌ FALHA: {body.get('error')}")
        return

    for candidate in body.get("candidates", []):
        for part in candidate.get("content", {}).get("parts", []):
            if "inlineData" in part:
                with open(OUTPUT_FILE, "wb") as f:
                    f.write(base64.b64decode(part["inlineData"]["data"]))
                print(f"✅ Imagem salva em {OUTPUT_FILE}")
                return
            if "text" in part:
                print(f"   Texto: {part['text'][:80]}")

    print("⚠️ Resposta sem imagem.")


if __name__ == "__main__":
    run_local_proxy()
