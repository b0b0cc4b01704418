import boto3
import json

# --- CONFIGURAÇÃO ---
# O nome exato da função que criamos no Terraform
FUNCTION_NAME = "nanobanana-generate-image-dev"
REGION = "us-east-1"
ORIGIN = "http://localhost:3000"


def invoke(lambda_client, method, body=None):
    payload = {
        "httpMethod": method,
        "headers": {"Origin": ORIGIN, "Content-Type": "application/json"},
        "body": json.dumps(body) if body is not None else None,
    }
    response = lambda_client.invoke(
        FunctionName=FUNCTION_NAME,
        InvocationType='RequestResponse',
        Payload=json.dumps(payload)
    )
    return json.loads(response['Payload'].read())


def run_test():
    print(f"🚀 Iniciando Smoke Test na função: {FUNCTION_NAME}...")

    lambda_client = boto3.client("lambda", region_name=REGION)

    try:
        # 1. Preflight
        print("📡 OPTIONS (preflight)...")
        result = invoke(lambda_client, "OPTIONS")
        if result.get("statusCode") == 200 and result["headers"].get("Access-Control-Allow-Origin") == ORIGIN:
            print("   ✅ CORS OK")
        else:
            print(f"   ⚠️ Preflight inesperado: {result}")

        # 2. Geração real
        print("📡 POST (generateContent)...")
        result = invoke(lambda_client, "POST", {
            "contents": [{"parts": [{"text": "A red paper boat on a pond"}]}],
        })

        if "errorMessage" in result:
            print(f"❌ Erro na execução da Lambda: {result['errorMessage']}")
            return

        status_code = result.get("statusCode")
        body = json.loads(result.get("body") or "{}")

        if status_code == 200:
            print("\n✅ SUCESSO! O proxy respondeu corretamente.")
            print(f"   -> Candidates: {len(body.get('candidates', []))}")
        else:
            print(f"\n⚠️ Falha: Status Code {status_code}")
            print(f"   Detalhes: {body}")

    except lambda_client.exceptions.ResourceNotFoundException:
        print(f"\n❌ Erro: Não encontrei a função '{FUNCTION_NAME}'.")
        print("   Verifique se o nome no arquivo Python bate com o output do Terraform.")
    except Exception as e:
        print(f"\n❌ Erro inesperado: {str(e)}")


if __name__ == "__main__":
    run_test()
